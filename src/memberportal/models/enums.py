"""String enums for the deal discussion channels."""

from enum import StrEnum


class Channel(StrEnum):
    MEMBER = "member"
    STEERCO = "steerco"
    SAMIRA = "samira"


class CommentSource(StrEnum):
    """Origin of an entry in the merged SteerCo view."""

    STEERCO = "steerco"
    MEMBER_STEERCO_ONLY = "member-steerco-only"


class FieldKind(StrEnum):
    READONLY = "readonly"
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    SINGLE_SELECT = "single_select"
    MULTI_SELECT = "multi_select"
    LINKED_RECORDS = "linked_records"
    FILE = "file"
