"""
HTTP client for the Tapestry import endpoints.
"""

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from .errors import ApiError, ResponseSchemaError
from .feedback import FeedbackAnalytics
from .models import ExtractedContact, FieldMapping, ImportResult, PdfProcessingResult

if TYPE_CHECKING:
    from .interface import UploadFile

logger = logging.getLogger(__name__)

WORKSPACE_HEADER = "x-workspace-slug"

CSV_IMPORT_PATH = "/api/admin/import-designers"
PDF_PROCESS_PATH = "/api/import/pdf/process"
PDF_IMPORT_PATH = "/api/import/pdf/import"
FEEDBACK_ANALYTICS_PATH = "/api/recommendations/feedback/analytics"

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class WorkspaceContext:
    """The workspace every request is scoped to"""

    slug: str | None = None

    @classmethod
    def from_path(cls, path: str) -> "WorkspaceContext":
        """
        Take the workspace slug from an app path like ``/acme/directory``.

        Args:
            path: URL path (or full URL path component) of a workspace page

        Returns:
            WorkspaceContext with the first path segment as slug
        """
        parts = path.split("/")
        slug = parts[1] if len(parts) > 1 else ""
        return cls(slug or None)

    def headers(self) -> dict[str, str]:
        return {WORKSPACE_HEADER: self.slug or ""}


class TapestryClient:
    """
    Thin wrapper around the Tapestry REST API.

    The workspace header is attached once to the underlying session so every
    call carries the same workspace identity.
    """

    def __init__(
        self,
        base_url: str,
        workspace: WorkspaceContext | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.workspace = workspace or WorkspaceContext()
        self.session = session or requests.Session()
        self.session.headers.update(self.workspace.headers())
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = self._url(path)
        logger.debug(f"{method.upper()} {url}")

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise ApiError(str(e)) from e

        if not response.ok:
            logger.warning(f"{method.upper()} {path} failed with HTTP {response.status_code}")
            raise ApiError(response.text, status_code=response.status_code)

        return response

    def _parse(self, response: requests.Response, model: type[ModelT]) -> ModelT:
        try:
            payload = response.json()
        except ValueError as e:
            raise ResponseSchemaError(f"Response is not valid JSON: {e}") from e

        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise ResponseSchemaError(
                f"Unexpected {model.__name__} response: {e}"
            ) from e

    def import_designers_csv(
        self, upload: "UploadFile", mappings: list[FieldMapping]
    ) -> ImportResult:
        """Upload a CSV file together with its column mappings"""
        mappings_json = json.dumps([mapping.model_dump(by_alias=True) for mapping in mappings])
        response = self._request(
            "post",
            CSV_IMPORT_PATH,
            files={"csv": upload.as_multipart()},
            data={"mappings": mappings_json},
        )
        return self._parse(response, ImportResult)

    def process_pdf(self, upload: "UploadFile") -> PdfProcessingResult:
        """Send one PDF to the extraction service"""
        response = self._request("post", PDF_PROCESS_PATH, files={"pdf": upload.as_multipart()})
        result = self._parse(response, PdfProcessingResult)
        return result.model_copy(update={"file_name": upload.name})

    def import_contacts(self, contacts: list[ExtractedContact]) -> ImportResult:
        """Create designers from extracted contacts in one request"""
        response = self._request(
            "post",
            PDF_IMPORT_PATH,
            json={"contacts": [contact.to_payload() for contact in contacts]},
        )
        return self._parse(response, ImportResult)

    def get_feedback_analytics(self) -> FeedbackAnalytics:
        """Fetch the recommendation feedback aggregates for the workspace"""
        response = self._request("get", FEEDBACK_ANALYTICS_PATH)
        return self._parse(response, FeedbackAnalytics)
