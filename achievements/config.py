"""
Scoring configuration for derived profile stats. Points and levels are
computed on read from designs and team memberships; nothing here is stored.
"""

# Points per page of a design that reached one of SCORED_DESIGN_STATUSES
POINTS_PER_DESIGN_PAGE = 10
SCORED_DESIGN_STATUSES = ("accepted", "in_development", "completed")

# Points per team membership on a completed design
POINTS_PER_COMPLETED_DEVELOPMENT = 30

# level = points // POINTS_PER_LEVEL + 1, unbounded above
POINTS_PER_LEVEL = 100

NEW_MEMBER_BADGE = {
    "key": "new-member",
    "name": "New Member",
    "description": "Joined the OpenStage community.",
    "badge_color": "#60a5fa",
}
DESIGN_COMPLETED_BADGE_COLOR = "#a855f7"
DEVELOPMENT_COMPLETED_BADGE_COLOR = "#22c55e"
