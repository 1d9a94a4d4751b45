# ABOUTME: Location resolution against the Open-Meteo geocoding API.
# ABOUTME: Runs an ordered list of fallback queries, then ranks candidates by region, name, and population.

import logging
import math

import httpx
from pydantic import ValidationError

from src.errors import LocationNotFound, ProviderError
from src.models import GeoCandidate, QueryParts, ResolutionAttempt, ResolvedLocation
from src.regions import REGIONAL_COUNTRY_CODE, REGIONAL_COUNTRY_NAME, split_query

logger = logging.getLogger(__name__)

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
MAX_CANDIDATES = 50
COUNTRY_SUFFIX = f", {REGIONAL_COUNTRY_NAME}"

COUNTRY_BONUS = 200
EXACT_REGION_BONUS = 200
PARTIAL_REGION_BONUS = 120
EXACT_NAME_BONUS = 120
PARTIAL_NAME_BONUS = 60
MAX_POPULATION_BONUS = 20


async def fetch_candidates(
    client: httpx.AsyncClient, query: str, country: str | None = None
) -> list[GeoCandidate] | None:
    """Run one geocoding search, returning None when the provider has no matches.

    Raises:
        ProviderError: The request failed, returned non-2xx, or the body was unusable.
    """
    params = {"name": query, "count": MAX_CANDIDATES, "language": "en", "format": "json"}
    if country:
        params["country"] = country

    try:
        resp = await client.get(GEOCODING_URL, params=params)
        resp.raise_for_status()
        data = resp.json()
    except httpx.HTTPError as e:
        raise ProviderError(f"Geocoding request failed for {query!r}: {e}") from e
    except ValueError as e:
        raise ProviderError(f"Geocoding response for {query!r} is not valid JSON") from e

    results = data.get("results") if isinstance(data, dict) else None
    if not results:
        return None

    try:
        return [GeoCandidate.model_validate(r) for r in results]
    except ValidationError as e:
        raise ProviderError(f"Geocoding response for {query!r} has malformed results") from e


def build_attempts(parts: QueryParts) -> tuple[ResolutionAttempt, ...]:
    """Return the fixed, ordered fallback queries tried for one location."""
    return (
        ResolutionAttempt(query=parts.text),
        ResolutionAttempt(query=parts.text, country=REGIONAL_COUNTRY_CODE),
        ResolutionAttempt(query=parts.text + COUNTRY_SUFFIX),
        ResolutionAttempt(query=parts.first_segment),
        ResolutionAttempt(query=parts.first_segment, country=REGIONAL_COUNTRY_CODE),
        ResolutionAttempt(query=parts.first_segment + COUNTRY_SUFFIX),
        ResolutionAttempt(query=parts.normalized),
        ResolutionAttempt(query=parts.normalized, country=REGIONAL_COUNTRY_CODE),
        ResolutionAttempt(query=parts.normalized_first),
        ResolutionAttempt(query=parts.normalized_first, country=REGIONAL_COUNTRY_CODE),
    )


async def resolve(client: httpx.AsyncClient, location_text: str) -> ResolvedLocation:
    """Resolve free-form location text to a single coordinate and display label.

    Attempts run one at a time and stop at the first that returns candidates. A failed
    attempt counts as empty so the next fallback still gets its turn.

    Raises:
        LocationNotFound: No attempt produced any candidate.
    """
    parts = split_query(location_text)

    for number, attempt in enumerate(build_attempts(parts), start=1):
        try:
            candidates = await fetch_candidates(client, attempt.query, country=attempt.country)
        except ProviderError:
            logger.warning(
                "Geocoding attempt %d failed (query=%r, country=%s)",
                number,
                attempt.query,
                attempt.country,
                exc_info=True,
            )
            continue

        if not candidates:
            logger.debug("Geocoding attempt %d returned no results (query=%r)", number, attempt.query)
            continue

        location = rank_candidates(candidates, parts.region_hint, parts.first_segment)
        logger.info("Resolved %r to %s on attempt %d", location_text, location.label, number)
        return location

    raise LocationNotFound(location_text)


def score_candidate(candidate: GeoCandidate, region_hint: str | None, first_segment: str) -> float:
    """Score a candidate: Indian results first, then region match, name match, population."""
    admin1 = (candidate.admin1 or "").lower()
    name = (candidate.name or "").lower()
    first = first_segment.lower()
    score = 0.0

    if candidate.country_code == REGIONAL_COUNTRY_CODE or candidate.country == REGIONAL_COUNTRY_NAME:
        score += COUNTRY_BONUS
    # Exact region and name matches also collect the partial bonus.
    if region_hint and admin1 == region_hint:
        score += EXACT_REGION_BONUS
    if region_hint and region_hint in admin1:
        score += PARTIAL_REGION_BONUS
    if name == first:
        score += EXACT_NAME_BONUS
    if first in name:
        score += PARTIAL_NAME_BONUS
    if candidate.population is not None:
        score += min(MAX_POPULATION_BONUS, math.log10(candidate.population + 1))
    return score


def rank_candidates(
    candidates: list[GeoCandidate], region_hint: str | None, first_segment: str
) -> ResolvedLocation:
    """Pick the best candidate, preferring those inside the hinted region.

    Ties go to the candidate the provider listed first.
    """
    if not candidates:
        raise LocationNotFound(first_segment)

    hint = region_hint.lower() if region_hint else None
    pool = candidates
    if hint:
        in_region = [c for c in candidates if hint in (c.admin1 or "").lower()]
        pool = in_region or candidates

    best = max(pool, key=lambda c: score_candidate(c, hint, first_segment))
    return ResolvedLocation(latitude=best.latitude, longitude=best.longitude, label=build_label(best))


def build_label(candidate: GeoCandidate) -> str:
    """Compose "name[, admin1][, country]" for display."""
    parts = [candidate.name or ""]
    if candidate.admin1:
        parts.append(candidate.admin1)
    if candidate.country:
        parts.append(candidate.country)
    return ", ".join(parts)
