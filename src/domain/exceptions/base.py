"""Base domain exception."""

from typing import Any, Dict, Optional


class DomainException(Exception):
    """
    Base exception for rejected requests.

    The billing engine itself never raises on bad record data; these cover
    requests that cannot be evaluated as a whole, such as a batch with
    ambiguous record ids.
    """

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def to_payload(self, request_id: Optional[str] = None) -> Dict[str, Any]:
        """Error body in the API error format."""
        return {"error": self.code, "message": self.message, "request_id": request_id}
