"""Member profile field registry: field key -> store field name and value kind.

Every key the member record can carry is registered so that submitting a
form built from the record never trips the unknown-field check. Fields the
member may not change (identity, status, internal relationship data) are
READONLY and skipped by the diff.
"""

from __future__ import annotations

from dataclasses import dataclass

from memberportal.config import Settings
from memberportal.models.enums import FieldKind

IDENTITY_KEYS = frozenset({"ID", "id"})


@dataclass(frozen=True)
class ProfileField:
    key: str
    name: str
    kind: FieldKind
    # Linked-record fields: Settings attribute holding the option table id
    table_attr: str | None = None
    display_field: str = "Name"

    @property
    def editable(self) -> bool:
        return self.kind != FieldKind.READONLY

    def table_id(self, settings: Settings) -> int | None:
        return getattr(settings, self.table_attr) if self.table_attr else None


def _linked(key: str, name: str, table_attr: str, display_field: str = "Name") -> ProfileField:
    return ProfileField(key, name, FieldKind.LINKED_RECORDS, table_attr, display_field)


_FIELDS = [
    # Core identity
    ProfileField("MEMBER_ID", "Member ID", FieldKind.READONLY),
    ProfileField("NAME", "Name", FieldKind.READONLY),
    ProfileField("EMAIL", "Email", FieldKind.READONLY),
    ProfileField("PHONE", "Phone #", FieldKind.READONLY),
    ProfileField("BIRTHDAY", "Birthday", FieldKind.DATE),
    ProfileField("TITLE", "Title", FieldKind.TEXT),
    ProfileField("BIO", "Bio", FieldKind.TEXT),
    ProfileField("HEADSHOT", "Headshot", FieldKind.FILE),
    ProfileField("PORTAL_ID", "Portal ID", FieldKind.READONLY),
    # Status
    ProfileField("MEMBER_STATUS", "Member Status", FieldKind.READONLY),
    ProfileField("ONBOARDING_STATUS", "Onboarding Status", FieldKind.READONLY),
    # Capital
    ProfileField("SOURCE_OF_WEALTH", "Source of Wealth", FieldKind.TEXT),
    ProfileField("ASSOCIATION_TO_CAPITAL", "Association to Capital", FieldKind.SINGLE_SELECT),
    ProfileField("ASSOCIATION_TO_CAPITAL_DETAILS", "Association to Capital Details", FieldKind.TEXT),
    ProfileField("AUM", "AUM", FieldKind.SINGLE_SELECT),
    ProfileField("CAPITAL_DISCRETION", "Capital Discretion", FieldKind.SINGLE_SELECT),
    ProfileField("CAPITAL_DISCRETION_DETAILS", "Capital Discretion Details", FieldKind.TEXT),
    ProfileField("CAPITAL_VEHICLE", "Capital Vehicle", FieldKind.TEXT),
    ProfileField("AVERAGE_CHECK_SIZE", "Average Check Size", FieldKind.TEXT),
    ProfileField(
        "CAPITAL_LIMITATIONS_OPPORTUNITIES",
        "Capital Limitations & Opportunities",
        FieldKind.MULTI_SELECT,
    ),
    # Investment preferences
    _linked("SECTOR_PREFERENCE", "Sector Preference", "sectors_table_id"),
    _linked("STAGE_PREFERENCE", "Stage Preference", "stages_table_id", display_field="Stage Name"),
    _linked("GEOGRAPHIES", "Geographies", "geographies_table_id"),
    ProfileField(
        "LIQUIDITY_EXIT_HORIZON",
        "Liquidity / Exit Horizon Preference",
        FieldKind.SINGLE_SELECT,
    ),
    ProfileField("FUNDING_TYPES", "Funding Types", FieldKind.MULTI_SELECT),
    # Accreditation
    ProfileField("ACCREDITED_INVESTOR", "Accredited Investor", FieldKind.BOOLEAN),
    ProfileField("REASON_NOT_ACCREDITED", "Reason Not Accredited", FieldKind.TEXT),
    # Agreements
    ProfileField("AGREED_NOT_DISCLOSE", "Agreed Not to Disclose CC Investments", FieldKind.BOOLEAN),
    ProfileField("AGREED_NOT_DISCLOSE_DETAILS", "Agreed Not to Disclose CC Investments Details", FieldKind.TEXT),
    ProfileField(
        "AGREED_NOT_CONTACT", "Agreed Not to Contact Group Member Without Consent", FieldKind.BOOLEAN
    ),
    ProfileField(
        "AGREED_NOT_CONTACT_DETAILS",
        "Agreed Not to Contact Group Member Without Consent Details",
        FieldKind.TEXT,
    ),
    ProfileField("AGREED_NOT_CIRCUMVENT", "Agreed Not to Circumvent CC on Investments", FieldKind.BOOLEAN),
    ProfileField(
        "AGREED_NOT_CIRCUMVENT_DETAILS", "Agreed Not to Circumvent CC on Investments Details", FieldKind.TEXT
    ),
    ProfileField("AGREED_NOT_INVESTMENT_ADVISOR", "Agreed CC Not Investment Advisor", FieldKind.BOOLEAN),
    ProfileField(
        "AGREED_NOT_INVESTMENT_ADVISOR_DETAILS", "Agreed CC Not Investment Advisor Details", FieldKind.TEXT
    ),
    # Personal
    _linked("PERSONAL_HOBBIES", "Personal Hobbies", "hobbies_table_id"),
    ProfileField("OTHER_HOBBIES", "Other Hobbies", FieldKind.TEXT),
    _linked("NON_PROFIT_INTERESTS", "Non-Profit Interests", "non_profits_table_id"),
    ProfileField("OTHER_NON_PROFIT_INTERESTS", "Other Non-Profit Interests", FieldKind.TEXT),
    # Contribution
    ProfileField("HOW_CC_CAN_SUPPORT", "How CC Can Support Member Goals", FieldKind.TEXT),
    ProfileField("INTENDED_CONTRIBUTION", "Intended Member Contribution", FieldKind.TEXT),
    ProfileField("AREAS_COMFORTABLE_SPEAKING", "Areas Comfortable Speaking to in Calls", FieldKind.TEXT),
    # Relationships (maintained by the team)
    ProfileField("RELATIONSHIP_FLAGS", "Relationship Flags", FieldKind.READONLY),
    ProfileField("INTERNAL_TIERS", "Internal Tiers", FieldKind.READONLY),
    ProfileField("INTERNAL_TIERS_NOTES", "Internal Tiers Notes", FieldKind.READONLY),
    ProfileField("INTRODUCED_BY_MEMBER", "Introduced By Member", FieldKind.READONLY),
    ProfileField("OTHER_INTRODUCTION_SOURCE", "Other Introduction Source", FieldKind.READONLY),
    # Related records
    ProfileField("DEALS", "Deals", FieldKind.READONLY),
    # Roster
    ProfileField("CONSENTED_TO_ROSTER", "Consented to Roster", FieldKind.BOOLEAN),
]

PROFILE_FIELDS: dict[str, ProfileField] = {f.key: f for f in _FIELDS}


def linked_option_tables(settings: Settings) -> dict[int, str]:
    """Option table id -> display column, for every linked-record profile field."""
    return {
        f.table_id(settings): f.display_field
        for f in _FIELDS
        if f.kind == FieldKind.LINKED_RECORDS
    }
