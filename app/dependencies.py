from datetime import datetime

import pytz
from fastapi import Request


def get_current_time() -> datetime:
    return datetime.now(pytz.UTC)


def get_storage(request: Request):
    return request.app.state.storage


def get_notifier(request: Request):
    return request.app.state.notifier
