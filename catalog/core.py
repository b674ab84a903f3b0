# catalog/core.py
import json
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence, Union

import structlog
from fastapi import Request, Response
from fastapi.responses import PlainTextResponse

logger = structlog.get_logger()

# ---------------------------
# Canned responses
# ---------------------------
def not_found() -> Response:
    return PlainTextResponse("Product not found", status_code=404)

def unauthorized() -> Response:
    return PlainTextResponse("Unauthorized", status_code=401)

def invalid_product() -> Response:
    return PlainTextResponse("Invalid product", status_code=400)

def server_error() -> Response:
    return PlainTextResponse("Something broke!", status_code=500)


# ---------------------------
# Request context
# ---------------------------
@dataclass
class RequestContext:
    """The parts of a request the gates and handlers look at."""

    method: str
    path: str
    token: Optional[str] = None
    product_id: Optional[str] = None
    query: Dict[str, str] = field(default_factory=dict)
    body: Any = None

    @classmethod
    async def from_request(cls, request: Request, product_id: Optional[str] = None) -> "RequestContext":
        body: Any = {}
        if request.method in ("POST", "PUT", "PATCH"):
            raw = await request.body()
            content_type = request.headers.get("content-type", "")
            # Non-JSON or empty bodies read as an empty object; bad JSON raises.
            if raw and "json" in content_type:
                body = json.loads(raw)
        return cls(
            method=request.method,
            path=request.url.path,
            token=request.headers.get("token"),
            product_id=product_id,
            query=dict(request.query_params),
            body=body,
        )


# ---------------------------
# Gate results
# ---------------------------
class Admit:
    """Gate verdict: let the request continue."""

    def __repr__(self) -> str:
        return "Admit()"


@dataclass
class Reject:
    """Gate verdict: stop here and answer with `response`."""

    response: Response
    reason: str = ""


ADMIT = Admit()

GateResult = Union[Admit, Reject]
Gate = Callable[[RequestContext], GateResult]
Handler = Callable[[RequestContext], Response]


# ---------------------------
# Gates
# ---------------------------
def require_token(secret: str) -> Gate:
    """Build a gate admitting only requests whose `token` header equals `secret`."""

    def authenticate(ctx: RequestContext) -> GateResult:
        if ctx.token == secret:
            return ADMIT
        return Reject(unauthorized(), reason="bad or missing token")

    return authenticate


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _has_non_finite(value: Any) -> bool:
    # 1e400, NaN and Infinity parse to floats that cannot be written back as JSON
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(_has_non_finite(v) for v in value.values())
    if isinstance(value, list):
        return any(_has_non_finite(v) for v in value)
    return False


def validate_product(ctx: RequestContext) -> GateResult:
    body = ctx.body
    if not isinstance(body, dict):
        return Reject(invalid_product(), reason="body is not an object")
    name = body.get("name")
    # Product.name is typed str, so truthy non-strings are refused too
    if not name or not isinstance(name, str):
        return Reject(invalid_product(), reason="name missing or empty")
    if not _is_number(body.get("price")):
        return Reject(invalid_product(), reason="price is not a number")
    if _has_non_finite(body):
        return Reject(invalid_product(), reason="non-finite number in payload")
    return ADMIT


# ---------------------------
# Pipeline
# ---------------------------
def run_pipeline(ctx: RequestContext, gates: Sequence[Gate], handler: Handler) -> Response:
    """
    Run `gates` in order, then `handler`.

    The first Reject short-circuits: its response is returned and no later
    gate, nor the handler, is called. Exceptions are not caught here; they
    belong to the error boundary middleware.
    """
    for gate in gates:
        result = gate(ctx)
        if isinstance(result, Reject):
            logger.warning(
                "Request rejected",
                gate=getattr(gate, "__name__", repr(gate)),
                reason=result.reason,
                status_code=result.response.status_code,
                method=ctx.method,
                path=ctx.path,
            )
            return result.response
    return handler(ctx)
