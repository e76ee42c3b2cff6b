from __future__ import annotations

from fastapi import Depends, Request

from shortlinks.core.config import Settings
from shortlinks.db.store import UrlStore
from shortlinks.services.codes import CodeGenerator
from shortlinks.services.links import LinkService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> UrlStore:
    # built once by create_app and shared by every request
    return request.app.state.store


def get_link_service(store: UrlStore = Depends(get_store)) -> LinkService:
    return LinkService(store, CodeGenerator(store))


def get_base_url(request: Request, settings: Settings = Depends(get_app_settings)) -> str:
    return settings.public_base_url or str(request.base_url)

