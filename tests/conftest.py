"""Shared helpers for building DXF text in tests."""

from __future__ import annotations

from typing import TypeAlias

import io

import ezdxf
import pytest

Record: TypeAlias = list[tuple[int | str, object]]


def build_dxf(*records: Record, section: str = "ENTITIES") -> str:
    """Wrap (code, value) records in a single DXF section."""
    lines = ["0", "SECTION", "2", section]
    for record in records:
        for code, value in record:
            lines.extend([str(code), str(value)])
    lines.extend(["0", "ENDSEC", "0", "EOF"])
    return "\n".join(lines) + "\n"


def ezdxf_text(doc: ezdxf.document.Drawing) -> str:
    """Serialize an ezdxf document to DXF text."""
    stream = io.StringIO()
    doc.write(stream)
    return stream.getvalue()


@pytest.fixture
def make_dxf():
    return build_dxf


@pytest.fixture
def serialize():
    return ezdxf_text
