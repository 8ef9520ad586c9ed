"""Pets API."""
from fastapi import APIRouter

from petmagic.api.pets import routes_pets

router = APIRouter()

router.include_router(routes_pets.router, prefix="/pets", tags=["pets"])
