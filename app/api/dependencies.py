"""FastAPI dependency providers.

The collection store is created once per application (see app.main) and kept
on app.state; services are built per request around it.
"""
from fastapi import Depends, Request

from app.config import Settings
from app.services.analyzer import ResumeAnalyzer, get_resume_analyzer
from app.services.resume_storage import ResumeStorageService
from app.services.sharing import PublicSharingService
from app.services.store import CollectionStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> CollectionStore:
    return request.app.state.store


def get_analyzer() -> ResumeAnalyzer:
    return get_resume_analyzer()


def get_resume_storage(store: CollectionStore = Depends(get_store)) -> ResumeStorageService:
    return ResumeStorageService(store)


def get_sharing_service(
    store: CollectionStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> PublicSharingService:
    return PublicSharingService(store, settings.share_base_url)
