"""Per-channel table layout for the three deal discussion channels."""

from __future__ import annotations

from dataclasses import dataclass

from memberportal.config import Settings
from memberportal.models.enums import Channel
from memberportal.store import fields as F


@dataclass(frozen=True)
class ChannelLayout:
    """Where a channel's comments live and which columns it carries.

    ``authored`` channels store one member in the Author link; the Samira
    channel instead stores the Target Members link. ``flag_fields`` maps the
    writable channel-specific flags to their store columns.
    """

    channel: Channel
    table_attr: str
    authored: bool
    flag_fields: dict[str, str]
    resource_name: str

    def table_id(self, settings: Settings) -> int:
        return getattr(settings, self.table_attr)


CHANNEL_LAYOUTS: dict[Channel, ChannelLayout] = {
    Channel.MEMBER: ChannelLayout(
        channel=Channel.MEMBER,
        table_attr="deal_comments_table_id",
        authored=True,
        flag_fields={
            "is_anonymous": F.COMMENT_IS_ANONYMOUS,
            "steerco_only": F.COMMENT_STEERCO_ONLY,
        },
        resource_name="Comment",
    ),
    Channel.STEERCO: ChannelLayout(
        channel=Channel.STEERCO,
        table_attr="steerco_comments_table_id",
        authored=True,
        flag_fields={},
        resource_name="SteerCo comment",
    ),
    Channel.SAMIRA: ChannelLayout(
        channel=Channel.SAMIRA,
        table_attr="samira_comments_table_id",
        authored=False,
        flag_fields={},
        resource_name="Samira comment",
    ),
}


def layout_for(channel: Channel) -> ChannelLayout:
    return CHANNEL_LAYOUTS[Channel(channel)]
