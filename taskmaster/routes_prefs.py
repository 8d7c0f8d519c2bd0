# -*- coding: utf-8 -*-

"""
Preferences API Routes.

Theme preference endpoints at /v1/preferences.
"""

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from taskmaster.routes_tasks import verify_api_key
from taskmaster.store_prefs import PreferencesStore, Theme


class ThemePreference(BaseModel):
    theme: Theme


router = APIRouter(prefix="/v1/preferences", dependencies=[Depends(verify_api_key)])


def get_prefs_store(request: Request) -> PreferencesStore:
    return request.app.state.prefs_store


@router.get("/theme", response_model=ThemePreference)
async def get_theme(prefs: PreferencesStore = Depends(get_prefs_store)):
    return ThemePreference(theme=prefs.theme)


@router.put("/theme", response_model=ThemePreference)
async def set_theme(body: ThemePreference, prefs: PreferencesStore = Depends(get_prefs_store)):
    return ThemePreference(theme=prefs.set_theme(body.theme))


@router.post("/theme/toggle", response_model=ThemePreference)
async def toggle_theme(prefs: PreferencesStore = Depends(get_prefs_store)):
    """Switch between light and dark mode."""
    return ThemePreference(theme=prefs.toggle_theme())
