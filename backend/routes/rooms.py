"""Room offer/answer exchange API. Rooms are addressed by slug, records by ?key=."""

import json
import logging
from typing import Any

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from services.room_store import InvalidOffer, SessionNotFound, rooms

router = APIRouter(prefix="/room", tags=["rooms"])
logger = logging.getLogger(__name__)

_UNPARSEABLE = object()


class OfferCreateResponse(BaseModel):
    key: str


class AnswerSubmitResponse(BaseModel):
    ok: bool = True


class SessionReadResponse(BaseModel):
    """Polled by the offering peer until ``answer`` is non-null."""

    offer: Any
    answer: Any = None


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON; browsers refuse them too.
    raise ValueError(f"non-standard JSON constant {name}")


async def _read_json(request: Request) -> Any:
    body = await request.body()
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return _UNPARSEABLE


@router.post("/{slug}/offer", response_model=OfferCreateResponse, status_code=200)
async def create_offer(
    slug: str,
    request: Request,
    key: str | None = Query(None, description="Session key; generated when omitted"),
):
    """Publish an offer. The JSON body is stored verbatim as the offer."""
    payload = await _read_json(request)
    if payload is _UNPARSEABLE:
        logger.info("[rooms] POST /room/%s/offer with unparseable body", slug)
        payload = None
    async with rooms.open(slug) as room:
        try:
            key = room.create_offer(payload, key=key)
        except InvalidOffer:
            return JSONResponse({"error": "invalid offer"}, status_code=400)
    return OfferCreateResponse(key=key)


@router.post("/{slug}/answer", response_model=AnswerSubmitResponse, status_code=200)
async def submit_answer(
    slug: str,
    request: Request,
    key: str | None = Query(None, description="Key returned by the offer call"),
):
    """
    Attach an answer to an existing offer.

    An unparseable body is accepted and stores no answer; only a missing
    offer is an error here.
    """
    body = await _read_json(request)
    if body is _UNPARSEABLE:
        logger.info("[rooms] POST /room/%s/answer with unparseable body; storing empty answer", slug)
        body = {}
    answer = body.get("answer") if isinstance(body, dict) else None
    async with rooms.open(slug) as room:
        try:
            room.submit_answer(key, answer)
        except SessionNotFound:
            return JSONResponse({"error": "no offer"}, status_code=404)
    return AnswerSubmitResponse(ok=True)


@router.get("/{slug}/get", response_model=SessionReadResponse, status_code=200)
async def read_session(
    slug: str,
    key: str | None = Query(None, description="Key returned by the offer call"),
):
    async with rooms.open(slug) as room:
        try:
            session = room.read_session(key)
        except SessionNotFound:
            return PlainTextResponse("Not found", status_code=404)
    return SessionReadResponse(**session)
