"""
Single-page PDF documents built by hand.

Only what a report or invoice needs: one Helvetica font, left-aligned lines
of Latin-1 text top-down on a letter-sized page. Object offsets in the xref
table are computed from the encoded bytes so viewers can open the file
without repairing it.
"""
from typing import Iterable, List

PAGE_WIDTH = 612
PAGE_HEIGHT = 792
MARGIN_LEFT = 50
FIRST_LINE_Y = 750
LINE_HEIGHT = 20
FONT_SIZE = 12


def escape_text(text: str) -> str:
    """Escape a string for a PDF literal; characters outside Latin-1 become '?'."""
    safe = str(text).encode("latin-1", "replace").decode("latin-1")
    return safe.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)").replace("\r", " ").replace("\n", " ")


def _content_stream(lines: Iterable[str]) -> bytes:
    ops = ["BT", f"/F1 {FONT_SIZE} Tf", f"{MARGIN_LEFT} {FIRST_LINE_Y} Td"]
    for i, line in enumerate(lines):
        if i:
            ops.append(f"0 -{LINE_HEIGHT} Td")
        ops.append(f"({escape_text(line)}) Tj")
    ops.append("ET")
    return "\n".join(ops).encode("latin-1")


def render_pdf(lines: List[str]) -> bytes:
    stream = _content_stream(lines)
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 {PAGE_WIDTH} {PAGE_HEIGHT}] "
            "/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>"
        ).encode("latin-1"),
        b"<< /Length " + str(len(stream)).encode("ascii") + b" >>\nstream\n" + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode("ascii") + body + b"\nendobj\n"

    xref_offset = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode("ascii")
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode("ascii")
    out += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_offset}\n%%EOF\n".encode("ascii")
    return bytes(out)
