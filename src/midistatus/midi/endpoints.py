"""MIDI endpoint enumeration and selection."""

import logging
from dataclasses import dataclass

import mido

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Endpoint:
    """An available MIDI port.

    Attributes:
        id: Position of the port in the backend's port list, as a string
        name: Advertised port name
    """

    id: str
    name: str


def list_inputs() -> list[Endpoint]:
    """List available MIDI input endpoints."""
    return [Endpoint(str(i), name) for i, name in enumerate(mido.get_input_names())]


def list_outputs() -> list[Endpoint]:
    """List available MIDI output endpoints."""
    return [Endpoint(str(i), name) for i, name in enumerate(mido.get_output_names())]


def list_endpoints() -> dict[str, list[Endpoint]]:
    """
    List all available MIDI endpoints.

    Returns:
        Dictionary with 'input' and 'output' lists of endpoints
    """
    return {"input": list_inputs(), "output": list_outputs()}


def select_endpoint(endpoints: list[Endpoint], selector: str) -> Endpoint | None:
    """
    Select an endpoint by exact id, or by case-insensitive name prefix.

    An exact id match wins over a name match. Name matching compares the
    first ``len(selector)`` characters of each name, so ``"launchpad"``
    selects ``"Launchpad Pro MIDI 1"``.

    Args:
        endpoints: Candidates, in backend order
        selector: Endpoint id or name prefix

    Returns:
        The first matching endpoint, or None
    """
    if not selector:
        return None

    for endpoint in endpoints:
        if endpoint.id == selector:
            logger.debug(f"Selected endpoint by id {selector}: {endpoint.name}")
            return endpoint

    prefix = selector.casefold()
    for endpoint in endpoints:
        if len(endpoint.name) < len(selector):
            continue
        if endpoint.name[: len(selector)].casefold() == prefix:
            logger.debug(f"Selected endpoint by name {selector!r}: {endpoint.name}")
            return endpoint

    return None
