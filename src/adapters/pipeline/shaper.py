"""
Request shaping.

Turns one canonical bid request into the partner-specific requests to send.
The caller's request is never modified: impressions are rewritten on copies,
and site/app/publisher objects are replaced rather than mutated.
"""

import copy
from dataclasses import dataclass, replace

from ..definition import AdapterDefinition, RequestOverrides
from ..errors import AdapterError, BadInput
from ..ext.params import decode_imp_ext, parse_imp_params
from ..logging import pipeline_logger
from ..models.bid import RequestPolicy
from ..models.openrtb import Banner, BidRequest, Imp, Publisher

logger = pipeline_logger()


@dataclass
class ShapedRequest:
    """A partner-ready request and the impressions it carries."""

    request: BidRequest
    imp_ids: list[str]


def normalize_banner_size(banner: Banner) -> Banner:
    """
    Return a copy of a banner with explicit w/h.

    Explicit dimensions are kept; otherwise the first format entry is used.

    Raises:
        ValueError: a dimension is zero, or no size is declared at all
    """
    if banner.w is not None and banner.h is not None:
        if banner.w == 0 or banner.h == 0:
            raise ValueError(f"Invalid sizes provided for Banner {banner.w}x{banner.h}")
        return replace(banner)

    if not banner.format:
        raise ValueError("No sizes provided for Banner")

    first = banner.format[0]
    return replace(banner, w=first.w, h=first.h)


def check_media_types(imp: Imp, index: int, definition: AdapterDefinition) -> None:
    """Raise BadInput if the impression declares a media type the partner can't serve."""
    declared = imp.media_types
    if not declared:
        raise BadInput(
            f"imp #{index}: no media type declared. Ignoring Imp ID={imp.id}",
            imp_index=index,
        )

    supported = {bid_type.value for bid_type in definition.media_types}
    unsupported = [name for name in declared if name not in supported]
    if unsupported:
        raise BadInput(
            f"imp #{index}: {definition.name} doesn't support "
            f"{', '.join(unsupported)} impressions. Ignoring Imp ID={imp.id}",
            imp_index=index,
        )


def prepare_imp(
    imp: Imp, index: int, definition: AdapterDefinition
) -> tuple[Imp, RequestOverrides]:
    """
    Validate and rewrite one impression.

    Returns:
        Tuple of (rewritten copy, request-level overrides)

    Raises:
        BadInput: the impression must be dropped
    """
    check_media_types(imp, index, definition)
    params = parse_imp_params(imp, index, definition.params_cls)

    # The partner always receives ext as a JSON object
    imp_copy = replace(imp, ext=decode_imp_ext(imp))
    try:
        rewritten = definition.rewrite_imp(imp_copy, params)
    except ValueError as e:
        raise BadInput(f"imp #{index}: {e}", imp_index=index) from e

    return rewritten, definition.request_overrides(params)


def apply_overrides(request: BidRequest, overrides: RequestOverrides) -> None:
    """
    Apply request-level overrides to a request copy.

    Site, app and publisher are replaced with modified copies, so objects
    shared with the caller's request are left untouched.
    """
    if overrides.is_empty():
        return

    if overrides.site_id and request.site is not None:
        request.site = replace(request.site, id=overrides.site_id)

    if overrides.app_id and request.app is not None:
        request.app = replace(request.app, id=overrides.app_id)

    if overrides.publisher_id:
        context_name = "app" if request.app is not None else "site"
        context = getattr(request, context_name)
        if context is None:
            return
        if context.publisher is not None:
            publisher = replace(context.publisher, id=overrides.publisher_id)
        else:
            publisher = Publisher(id=overrides.publisher_id)
        setattr(request, context_name, replace(context, publisher=publisher))


def merge_overrides(
    bidder: str, items: list[tuple[Imp, RequestOverrides]]
) -> RequestOverrides:
    """Combine per-impression overrides for a batched request; the last impression wins."""
    merged: dict[str, str] = {}
    for imp, overrides in items:
        for name in ("site_id", "app_id", "publisher_id"):
            value = getattr(overrides, name)
            if not value:
                continue
            previous = merged.get(name)
            if previous and previous != value:
                logger.info(
                    "Conflicting request-level override",
                    bidder=bidder,
                    field=name,
                    previous=previous,
                    value=value,
                    imp_id=imp.id,
                )
            merged[name] = value
    return RequestOverrides(**merged)


def _batched(
    request: BidRequest,
    items: list[tuple[Imp, RequestOverrides]],
    definition: AdapterDefinition,
) -> list[ShapedRequest]:
    shaped = copy.copy(request)
    shaped.imp = [imp for imp, _ in items]
    apply_overrides(shaped, merge_overrides(definition.name, items))
    return [ShapedRequest(request=shaped, imp_ids=[imp.id for imp in shaped.imp])]


def _split(
    request: BidRequest,
    items: list[tuple[Imp, RequestOverrides]],
) -> list[ShapedRequest]:
    result = []
    for imp, overrides in items:
        shaped = copy.copy(request)
        shaped.imp = [imp]
        apply_overrides(shaped, overrides)
        result.append(ShapedRequest(request=shaped, imp_ids=[imp.id]))
    return result


def shape_requests(
    request: BidRequest, definition: AdapterDefinition
) -> tuple[list[ShapedRequest], list[AdapterError]]:
    """
    Produce the partner requests for a canonical bid request.

    Args:
        request: Canonical request (read-only)
        definition: Partner rules

    Returns:
        Tuple of (shaped requests, errors). One error per dropped impression;
        no shaped requests when nothing survives.
    """
    if not request.imp:
        return [], [BadInput("No impression in the bid request")]

    context = definition.required_context
    if context and getattr(request, context) is None:
        return [], [BadInput(f"non-{context} request")]

    errors: list[AdapterError] = []
    items: list[tuple[Imp, RequestOverrides]] = []

    for index, imp in enumerate(request.imp):
        try:
            items.append(prepare_imp(imp, index, definition))
        except BadInput as e:
            logger.debug(
                "Dropping impression",
                bidder=definition.name,
                imp_id=imp.id,
                reason=e.message,
            )
            errors.append(e)

    # Never call the partner with an empty impression list
    if not items:
        return [], errors

    if definition.policy is RequestPolicy.SPLIT:
        return _split(request, items), errors
    return _batched(request, items, definition), errors

