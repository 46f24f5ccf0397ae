"""
Design lifecycle configuration: single source of truth for design types,
statuses and the transition table.

Page rules apply only when settings.DESIGN_ENFORCE_PAGE_RULES is on.
"""

# type -> (min_pages, max_pages); None means unbounded
TYPE_PAGE_RULES = {
    "website": (3, None),
    "web_application": (1, None),
    "landing_page": (1, 1),
}

TYPE_LABELS = {
    "website": "Website",
    "web_application": "Web Application",
    "landing_page": "Landing Page",
}

STATUS_LABELS = {
    "pending": "Pending Review",
    "accepted": "Accepted",
    "in_development": "In Development",
    "completed": "Completed",
    "rejected": "Rejected",
}

# action -> (source status, target status, timestamp field set on the design)
TRANSITIONS = {
    "accept": ("pending", "accepted", "accepted_at"),
    "reject": ("pending", "rejected", None),
    "start_development": ("accepted", "in_development", "development_started_at"),
    "complete": ("in_development", "completed", "completed_at"),
}

TERMINAL_STATUSES = ("completed", "rejected")

# Statuses visible on the development board
DEVELOPMENT_STATUSES = ("accepted", "in_development", "completed")

# Statuses whose designs accept new team members
JOINABLE_STATUSES = ("accepted", "in_development")

FIGMA_HOSTS = ("figma.com", "www.figma.com")

SUBMITTED_NOTE = "Design submitted"
