"""Pytest configuration and fixtures."""

from unittest.mock import Mock

import pytest

from import_designers.client import TapestryClient, WorkspaceContext
from import_designers.interface import UploadFile


@pytest.fixture
def sample_designers_csv_data():
    """Sample designer CSV data for testing."""
    return """Full Name,Job Title,Email Address,Seniority,City,Company,Portfolio URL,Notes
Ada Park,Senior Product Designer,ada@example.com,Senior,Berlin,Acme,https://ada.design,"Prefers remote, part-time"
Ben Ortiz,UX Researcher,ben@example.com,Mid,Lisbon,Globex,https://ben.io,

Cleo Tan,Brand Designer,cleo@example.com,Lead,Singapore,Initech,https://cleo.studio,Open to contract
"""


@pytest.fixture
def csv_upload(sample_designers_csv_data):
    """CSV upload built from the sample data."""
    return UploadFile(
        name="designers.csv",
        data=sample_designers_csv_data.encode("utf-8"),
        content_type="text/csv",
    )


@pytest.fixture
def make_pdf():
    """Build in-memory PDF uploads."""

    def _make_pdf(name="contacts.pdf", size=1024, content_type="application/pdf"):
        return UploadFile(name=name, data=b"%" * size, content_type=content_type)

    return _make_pdf


@pytest.fixture
def mock_response():
    """Build mock requests responses."""

    def _mock_response(json_data=None, status_code=200, text=""):
        response = Mock()
        response.status_code = status_code
        response.ok = status_code < 400
        response.text = text
        if isinstance(json_data, Exception):
            response.json.side_effect = json_data
        else:
            response.json.return_value = json_data
        return response

    return _mock_response


@pytest.fixture
def mock_session():
    """Mock requests session with a real headers dict."""
    session = Mock()
    session.headers = {}
    return session


@pytest.fixture
def client(mock_session):
    """API client bound to the mock session and the 'acme' workspace."""
    return TapestryClient(
        "https://tapestry.example.com/",
        workspace=WorkspaceContext("acme"),
        session=mock_session,
    )


@pytest.fixture
def extraction_payload():
    """Body returned by the PDF extraction endpoint."""

    def _extraction_payload(*names, confidence=0.9):
        return {
            "success": True,
            "contacts": [
                {
                    "name": name,
                    "title": "Product Designer",
                    "company": "Acme",
                    "linkedIn": f"https://linkedin.com/in/{name.lower().replace(' ', '')}",
                    "skills": ["Figma", "Prototyping", "Research"],
                    "confidence": confidence,
                }
                for name in names
            ],
            "totalPages": 1,
        }

    return _extraction_payload
