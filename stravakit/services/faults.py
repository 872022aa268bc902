"""Argument validation and translation of remote faults for the façades."""

import logging
from datetime import datetime
from typing import Any, Callable, Iterable, Optional, Sequence, Tuple, Type, TypeVar, Union

from stravakit.config import Config
from stravakit.exceptions import BadRequestError, InvalidArgumentError, NotFoundError
from stravakit.models import (
    Paging,
    StreamResolution,
    StreamSeriesDownsampling,
    StreamType,
)

logger = logging.getLogger(__name__)

E = TypeVar("E")


def _name(func: Callable) -> str:
    return getattr(func, "__name__", repr(func))


def call_remote(func: Callable[..., Any], *args, default: Any = None, **kwargs) -> Any:
    """Call the remote client, mapping its faults to caller-facing results.

    Not found becomes ``default``; a bad request is raised as
    InvalidArgumentError. Anything else propagates unchanged.
    """
    try:
        return func(*args, **kwargs)
    except NotFoundError as e:
        logger.debug(f"{_name(func)}: {e}")
        return default
    except BadRequestError as e:
        logger.warning(f"{_name(func)} rejected by Strava: {e}")
        raise InvalidArgumentError(
            str(e), status_code=e.status_code, response_body=e.response_body
        ) from e


def require_id(value: Any, name: str) -> Any:
    """Reject a missing identifier before anything is sent."""
    if value is None or value == "":
        raise InvalidArgumentError(f"{name} is required")
    return value


def validate_choice(value: Optional[Union[E, str]], enum_cls: Type[E], name: str) -> Optional[E]:
    """Coerce value to enum_cls, rejecting the UNKNOWN sentinel. None passes through."""
    if value is None:
        return None
    member = value if isinstance(value, enum_cls) else enum_cls(value)
    if member == enum_cls.UNKNOWN:
        raise InvalidArgumentError(f"Invalid {name}: {value}")
    return member


def validate_paging(paging: Optional[Paging]) -> Paging:
    if paging is None:
        return Paging()
    if paging.page < 1:
        raise InvalidArgumentError(f"Invalid page number: {paging.page}")
    if paging.per_page < 1 or paging.per_page > Config.MAX_PER_PAGE:
        raise InvalidArgumentError(
            f"Invalid page size: {paging.per_page} (must be 1-{Config.MAX_PER_PAGE})"
        )
    return paging


def to_epoch(value: Optional[Union[datetime, int]], name: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return int(value.timestamp())
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"Invalid {name}: {value!r}")
    return value


def all_stream_types() -> list[StreamType]:
    """Every requestable stream type, in declaration order."""
    return [t for t in StreamType if t != StreamType.UNKNOWN]


def validate_stream_arguments(
    resolution: Optional[Union[StreamResolution, str]],
    series_type: Optional[Union[StreamSeriesDownsampling, str]],
    types: Optional[Iterable[Union[StreamType, str]]],
) -> Tuple[Optional[StreamResolution], Optional[StreamSeriesDownsampling], list[StreamType]]:
    """Validate stream request arguments and fill in the default type list."""
    resolution = validate_choice(resolution, StreamResolution, "stream resolution")
    series_type = validate_choice(series_type, StreamSeriesDownsampling, "stream downsampling type")

    if isinstance(types, str):
        types = [types]

    requested = []
    for stream_type in types or []:
        if stream_type is None:
            raise InvalidArgumentError("Invalid stream type: None")
        requested.append(validate_choice(stream_type, StreamType, "stream type"))
    if not requested:
        requested = all_stream_types()
    return resolution, series_type, requested


def join_types(types: Sequence[StreamType]) -> str:
    """Comma-separated type list in request order, as Strava expects."""
    return ",".join(t.value for t in types)
