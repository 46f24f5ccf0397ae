"""
Plain-dict payloads for the JSON views. Model instances never reach the
response encoder directly.
"""
from designs import config


def _iso(value):
    return value.isoformat() if value else None


def history_entry_payload(entry):
    return {
        "id": entry.id,
        "status": entry.status,
        "changed_by": entry.changed_by_id,
        "notes": entry.notes,
        "created_at": _iso(entry.created_at),
    }


def comment_payload(comment):
    author = comment.author
    return {
        "id": comment.id,
        "comment": comment.comment,
        "is_admin_comment": comment.is_admin_comment,
        "created_at": _iso(comment.created_at),
        "user": {
            "first_name": author.first_name,
            "last_name": author.last_name,
            "role": author.role,
        },
    }


def design_payload(design, include_history=False, include_comments=False):
    data = {
        "id": design.id,
        "user_id": design.owner_id,
        "name": design.name,
        "type": design.type,
        "type_label": config.TYPE_LABELS.get(design.type, design.type),
        "pages_count": design.pages_count,
        "figma_link": design.figma_link,
        "description": design.description,
        "status": design.status,
        "status_label": config.STATUS_LABELS.get(design.status, design.status),
        "admin_notes": design.admin_notes,
        "created_at": _iso(design.created_at),
        "updated_at": _iso(design.updated_at),
        "accepted_at": _iso(design.accepted_at),
        "development_started_at": _iso(design.development_started_at),
        "completed_at": _iso(design.completed_at),
    }
    if include_history:
        data["status_history"] = [history_entry_payload(entry) for entry in design.status_history.all()]
    if include_comments:
        data["comments"] = [comment_payload(comment) for comment in design.comments.all()]
    return data
