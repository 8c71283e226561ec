"""HTTP primitives: request context, response, JSON envelope, API client."""

from sprig.http.request import RequestContext
from sprig.http.response import Response, redirect

__all__ = ["RequestContext", "Response", "redirect"]
