from __future__ import annotations

from fastapi import Request

from haven_app import HavenApp


def get_container(request: Request) -> HavenApp:
    return request.app.state.container
