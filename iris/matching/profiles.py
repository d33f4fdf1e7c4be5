"""Input models — the client risk profile and the underwriter appetite record.

Both models are the sanitising boundary in front of the scorer: stored rows
arrive with missing keys, ``null`` arrays, bare strings where lists were
expected, and premiums typed as text.  Validators coerce anything malformed to
"absent" so that :class:`~iris.matching.appetite.AppetiteScorer` only ever sees
clean values and never has to raise.
"""

from __future__ import annotations

import logging
import math
import re
from decimal import Decimal
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger("iris.matching.profiles")

DEFAULT_LOCATION = "United Kingdom"

RiskProfile = Literal["low", "medium", "high"]

_RISK_PROFILES = {"low", "medium", "high"}

# Currency symbols, thousands separators and whitespace stripped from premium text
_AMOUNT_NOISE_RE = re.compile(r"[£$€,\s]")


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


def coerce_amount(value: Any) -> float | None:
    """Return *value* as a finite float, or ``None`` when it is not numeric.

    Accepts ints, floats, Decimals and numeric text such as ``"10,000"`` or
    ``"£10,000"``.  Booleans, NaN, infinities and unparsable text are absent.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        amount = float(value)
    elif isinstance(value, str):
        cleaned = _AMOUNT_NOISE_RE.sub("", value)
        if not cleaned:
            return None
        try:
            amount = float(cleaned)
        except ValueError:
            logger.debug("Discarding non-numeric premium value %r", value)
            return None
    else:
        return None
    if not math.isfinite(amount):
        return None
    return amount


def coerce_text_list(value: Any) -> list[str]:
    """Normalise a free-text collection into a list of non-blank strings."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple, set, frozenset)):
        return []
    items: list[str] = []
    for item in value:
        if isinstance(item, str) and item.strip():
            items.append(item.strip())
    return items


def _optional_text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


# ---------------------------------------------------------------------------
# ClientProfile
# ---------------------------------------------------------------------------


class ClientProfile(BaseModel):
    """A client's risk profile, built transiently for one matching request.

    Attributes
    ----------
    client_name:
        Display name of the client; not used for scoring.
    industry:
        Free-text sector label, stored lower-cased.  Empty when unknown.
    revenue_band:
        Revenue bucket such as ``"1-5m"``; drives the premium estimate.
    risk_profile:
        ``low``, ``medium`` or ``high``; ``None`` when unknown.
    location:
        Client jurisdiction.  Defaults to the assumed home market.
    """

    client_name: Optional[str] = None
    industry: str = ""
    revenue_band: str = ""
    risk_profile: Optional[RiskProfile] = None
    location: str = DEFAULT_LOCATION

    @field_validator("industry", mode="before")
    @classmethod
    def _normalise_industry(cls, v: Any) -> str:
        return v.strip().lower() if isinstance(v, str) else ""

    @field_validator("revenue_band", mode="before")
    @classmethod
    def _normalise_revenue_band(cls, v: Any) -> str:
        if not isinstance(v, str):
            return ""
        return v.replace(" ", "").lower()

    @field_validator("risk_profile", mode="before")
    @classmethod
    def _normalise_risk_profile(cls, v: Any) -> str | None:
        if isinstance(v, str) and v.strip().lower() in _RISK_PROFILES:
            return v.strip().lower()
        if v is not None:
            logger.debug("Unrecognised risk profile %r treated as absent", v)
        return None

    @field_validator("location", mode="before")
    @classmethod
    def _default_location(cls, v: Any) -> str:
        return _optional_text(v) or DEFAULT_LOCATION

    @field_validator("client_name", mode="before")
    @classmethod
    def _normalise_client_name(cls, v: Any) -> str | None:
        return _optional_text(v)

    @classmethod
    def from_report_data(
        cls,
        report_data: dict[str, Any] | None,
        client_name: str | None = None,
    ) -> "ClientProfile":
        """Build a profile from a stored client report's ``report_data`` JSON.

        Reads the snake_case keys written by the client editor and falls back
        to the labels produced by document extraction (``"Industry"``,
        ``"Revenue Band"``).
        """
        data = report_data if isinstance(report_data, dict) else {}
        return cls(
            client_name=client_name or data.get("client_name") or data.get("Business/Client name"),
            industry=data.get("industry") or data.get("Industry"),
            revenue_band=data.get("revenue_band") or data.get("Revenue Band"),
            risk_profile=data.get("risk_profile"),
            location=data.get("location") or data.get("jurisdiction"),
        )


# ---------------------------------------------------------------------------
# AppetiteRecord
# ---------------------------------------------------------------------------


class AppetiteRecord(BaseModel):
    """One underwriter's stated appetite, as extracted from its appetite guide.

    Every field except ``underwriter_name`` may be empty; an empty record is
    still scored, using neutral defaults.
    """

    underwriter_name: str
    underwriter_id: Optional[str] = None
    logo_url: Optional[str] = None
    target_sectors: list[str] = Field(default_factory=list)
    specialty_focus: list[str] = Field(default_factory=list)
    geographic_coverage: list[str] = Field(default_factory=list)
    risk_appetite: Optional[str] = None
    minimum_premium: Optional[float] = None
    maximum_premium: Optional[float] = None
    exclusions: list[str] = Field(default_factory=list)

    @field_validator(
        "target_sectors",
        "specialty_focus",
        "geographic_coverage",
        "exclusions",
        mode="before",
    )
    @classmethod
    def _coerce_lists(cls, v: Any) -> list[str]:
        return coerce_text_list(v)

    @field_validator("minimum_premium", "maximum_premium", mode="before")
    @classmethod
    def _coerce_premiums(cls, v: Any) -> float | None:
        return coerce_amount(v)

    @field_validator("risk_appetite", "logo_url", mode="before")
    @classmethod
    def _coerce_optional_text(cls, v: Any) -> str | None:
        return _optional_text(v)

    @field_validator("underwriter_id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> str | None:
        return None if v is None else str(v)

    @field_validator("underwriter_name", mode="before")
    @classmethod
    def _coerce_name(cls, v: Any) -> str:
        return v.strip() if isinstance(v, str) else ""

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "AppetiteRecord":
        """Build a record from a stored row.

        Accepts either a flat ``underwriter_appetite_data`` row or an
        ``underwriter_appetites`` guide joined with its data under
        ``appetite_data`` (an object, a one-element list, or ``null`` for a
        guide that has not been processed yet).
        """
        if "appetite_data" in row:
            nested = row.get("appetite_data")
            if isinstance(nested, list):
                nested = nested[0] if nested else None
            fields = nested if isinstance(nested, dict) else {}
            underwriter_id = row.get("id")
            name = row.get("underwriter_name") or fields.get("underwriter_name")
            logo_url = row.get("logo_url") or fields.get("logo_url")
        else:
            fields = row
            underwriter_id = row.get("appetite_document_id") or row.get("id")
            name = row.get("underwriter_name")
            logo_url = row.get("logo_url")

        return cls(
            underwriter_name=name,
            underwriter_id=underwriter_id,
            logo_url=logo_url,
            target_sectors=fields.get("target_sectors"),
            specialty_focus=fields.get("specialty_focus"),
            geographic_coverage=fields.get("geographic_coverage"),
            risk_appetite=fields.get("risk_appetite"),
            minimum_premium=fields.get("minimum_premium"),
            maximum_premium=fields.get("maximum_premium"),
            exclusions=fields.get("exclusions"),
        )
