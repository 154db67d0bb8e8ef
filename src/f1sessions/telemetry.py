"""Lap-telemetry provider adapter; every request passes through the rate gate."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import TypeAdapter

from f1sessions._http import parse_response
from f1sessions.exceptions import ProviderValidationError
from f1sessions.gate import RateGate
from f1sessions.models.driver import Driver
from f1sessions.models.lap import Lap
from f1sessions.models.session import Session

T = TypeVar("T")


def _validate_list(model_type: type[T], data: Any) -> list[T]:
    """Validate a list of dicts against a Pydantic model."""
    try:
        adapter = TypeAdapter(list[model_type])
        return adapter.validate_python(data)
    except Exception as exc:
        raise ProviderValidationError(
            f"Failed to validate {model_type.__name__} response: {exc}"
        ) from exc


class TelemetryClient:
    """Typed access to ``/sessions``, ``/laps`` and ``/drivers``.

    Each method returns None when the provider has no data for the query.
    """

    def __init__(self, gate: RateGate) -> None:
        self._gate = gate

    async def _get(self, endpoint: str, model: type[T], **params: Any) -> list[T] | None:
        response = await self._gate.fetch(endpoint, params=params)
        data = parse_response(response)
        if data is None:
            return None
        return _validate_list(model, data)

    async def sessions(self, year: int) -> list[Session] | None:
        """All sessions of a season, across every meeting."""
        return await self._get("/sessions", Session, year=year)

    async def laps(self, session_key: int) -> list[Lap] | None:
        return await self._get("/laps", Lap, session_key=session_key)

    async def drivers(self, session_key: int) -> list[Driver] | None:
        return await self._get("/drivers", Driver, session_key=session_key)

    async def close(self) -> None:
        await self._gate.close()
