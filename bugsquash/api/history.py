"""
GET /history, DELETE /history
Past runs, newest first, and a way to wipe them.
Plain def handlers: the file-backed store does blocking I/O, so these run in
the threadpool.
"""
from fastapi import APIRouter

from bugsquash.services.history_store import format_time_ago, get_history_store

router = APIRouter(tags=["History"])


@router.get("/history")
def get_history():
    items = get_history_store().get_history()
    return {
        "items": [
            {**item.model_dump(by_alias=True), "timeAgo": format_time_ago(item.timestamp)}
            for item in items
        ]
    }


@router.delete("/history")
def clear_history():
    get_history_store().clear()
    return {"cleared": True}
