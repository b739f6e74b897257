"""
Bidder adapter: one AdapterDefinition bound to its AdapterConfig.

make_requests() shapes a canonical request into transport envelopes;
make_bids() normalizes the partner's answer to one envelope. Both are
stateless, so a single Adapter can serve concurrent auctions.
"""

from .config.adapter_config import AdapterConfig
from .definition import AdapterDefinition
from .errors import AdapterError, InternalError
from .logging import LogContext, bidder_logger, log_execution_time
from .models.bid import (
    BidderDebug,
    BidderResponse,
    RequestData,
    ResponseData,
    ResultShape,
    TypedBid,
)
from .models.openrtb import BidRequest, Imp
from .pipeline.envelope import build_envelope
from .pipeline.normalizer import normalize_response
from .pipeline.shaper import shape_requests


def sent_imps(request: BidRequest, request_data: RequestData) -> list[Imp]:
    """Impressions of the canonical request carried by an envelope."""
    if not request_data.imp_ids:
        return list(request.imp)
    sent = set(request_data.imp_ids)
    return [imp for imp in request.imp if imp.id in sent]


class Adapter:
    """
    Translates between the canonical OpenRTB model and one partner.

    Attributes:
        definition: Partner rules
        config: Endpoint and runtime settings
    """

    def __init__(self, definition: AdapterDefinition, config: AdapterConfig):
        self.definition = definition
        self.config = config
        self.logger = bidder_logger(definition.name)

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def endpoint(self) -> str:
        return self.config.endpoint

    @log_execution_time
    def make_requests(
        self, request: BidRequest
    ) -> tuple[list[RequestData], list[AdapterError]]:
        """
        Build the outbound envelopes for a canonical request.

        Args:
            request: Canonical bid request; not modified

        Returns:
            Tuple of (envelopes, errors). A serialization failure drops only
            its own envelope.
        """
        with LogContext(request.id):
            return self._make_requests(request)

    def _make_requests(
        self, request: BidRequest
    ) -> tuple[list[RequestData], list[AdapterError]]:
        shaped_requests, errors = shape_requests(request, self.definition)

        envelopes = []
        for shaped in shaped_requests:
            try:
                envelopes.append(
                    build_envelope(shaped, self.endpoint, self.definition.headers)
                )
            except InternalError as e:
                self.logger.error(
                    "Failed to build envelope",
                    request_id=request.id,
                    imp_ids=shaped.imp_ids,
                    error=e.message,
                )
                errors.append(e)

        if errors:
            self.logger.debug(
                "Request shaping reported errors",
                request_id=request.id,
                errors=[e.to_dict() for e in errors],
            )
        return envelopes, errors

    @log_execution_time
    def make_bids(
        self,
        internal_request: BidRequest,
        request_data: RequestData,
        response_data: ResponseData,
    ) -> tuple[BidderResponse | list[TypedBid] | None, list[AdapterError]]:
        """
        Normalize the partner's response to one envelope.

        Args:
            internal_request: The canonical request make_requests received
            request_data: The envelope that was sent
            response_data: Status and body returned by the transport

        Returns:
            Tuple of (bids, errors). Bids are a BidderResponse for typed
            adapters and a list of TypedBid for legacy ones; None when the
            partner returned 204 or the call failed outright.
        """
        with LogContext(internal_request.id):
            return self._make_bids(internal_request, request_data, response_data)

    def _make_bids(
        self,
        internal_request: BidRequest,
        request_data: RequestData,
        response_data: ResponseData,
    ) -> tuple[BidderResponse | list[TypedBid] | None, list[AdapterError]]:
        result, errors = normalize_response(
            sent_imps(internal_request, request_data),
            response_data,
            self.definition,
            debug=self.config.debug,
        )

        for error in errors:
            self.logger.warning(
                "Partner response error",
                request_id=internal_request.id,
                **error.to_dict(),
            )

        if result is not None and self.config.debug:
            result.debug.append(
                BidderDebug(
                    request_uri=request_data.uri,
                    request_body=request_data.body.decode("utf-8", errors="replace"),
                    status_code=response_data.status_code,
                    response_body=response_data.body.decode("utf-8", errors="replace"),
                )
            )

        if self.definition.result_shape is ResultShape.LEGACY:
            return (result.bids if result is not None else None), errors
        return result, errors

    def __repr__(self) -> str:
        return f"Adapter(name={self.name!r}, endpoint={self.endpoint!r})"
