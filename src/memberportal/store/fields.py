"""Stable field names of the record store tables used by the portal."""

# Deals
DEAL_STEERCO_MEMBERS = "SteerCo Members"

# Comment tables (shared columns)
COMMENT_DEAL = "Deal"
COMMENT_TEXT = "Comment Text"
COMMENT_DOCUMENTS = "Documents"
COMMENT_IS_DELETED = "Is Deleted"
COMMENT_CREATED = "Created Date"
COMMENT_UPDATED = "Last Updated"

# Member and SteerCo comments
COMMENT_AUTHOR = "Author"

# Member comments only
COMMENT_IS_ANONYMOUS = "Is Anonymous"
COMMENT_STEERCO_ONLY = "SteerCo Only"

# Samira comments only
COMMENT_TARGET_MEMBERS = "Target Members"

# Admin accounts
ADMIN_EMAIL = "Email"
