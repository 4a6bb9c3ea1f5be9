"""FastAPI dependency injection — per-app services held on ``app.state``."""

from __future__ import annotations

from fastapi import Request

from dirshare.config import Settings
from dirshare.services.admission import AdmissionGate
from dirshare.services.file_delivery import FileDelivery
from dirshare.services.path_resolver import PathResolver


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_resolver(request: Request) -> PathResolver:
    return request.app.state.resolver


def get_delivery(request: Request) -> FileDelivery:
    return request.app.state.delivery


def get_gate(request: Request) -> AdmissionGate:
    return request.app.state.gate


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "-"
