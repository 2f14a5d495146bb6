"""
LaTeX Compilation Service - turns LaTeX source into a PDF with pdflatex.

Each compile runs in its own temporary directory which is always removed.
"""

import logging
import subprocess
import tempfile
from pathlib import Path

from fastapi import HTTPException

from sensai.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

TEX_FILENAME = "resume.tex"
PDF_FILENAME = "resume.pdf"


class LatexCompileError(Exception):
    """pdflatex ran but could not produce a PDF."""

    def __init__(self, details: str):
        self.details = details
        super().__init__(details)


def run_pdflatex(latex_code: str) -> bytes:
    """
    Compile LaTeX source and return the PDF bytes.

    Raises:
        LatexCompileError: the document has errors
        FileNotFoundError / subprocess.TimeoutExpired: environment problems
    """
    with tempfile.TemporaryDirectory(prefix="latex-") as temp_dir:
        work_dir = Path(temp_dir)
        tex_path = work_dir / TEX_FILENAME
        tex_path.write_text(latex_code, encoding="utf-8")

        result = subprocess.run(
            [
                settings.pdflatex_command,
                "-interaction=nonstopmode",
                f"-output-directory={work_dir}",
                str(tex_path)
            ],
            cwd=work_dir,
            capture_output=True,
            text=True,
            timeout=settings.latex_timeout_seconds
        )

        pdf_path = work_dir / PDF_FILENAME
        if result.returncode != 0 or not pdf_path.exists():
            raise LatexCompileError(result.stderr or result.stdout or "pdflatex failed")

        return pdf_path.read_bytes()


def compile_latex(latex_code: str) -> bytes:
    """Compile for an API request, mapping failures to HTTP errors."""
    if not latex_code or not latex_code.strip():
        raise HTTPException(status_code=400, detail="LaTeX code is required")

    try:
        return run_pdflatex(latex_code)
    except LatexCompileError as e:
        logger.info("LaTeX compilation failed")
        raise HTTPException(
            status_code=400,
            detail={
                "error": "LaTeX compilation failed. Please check your LaTeX code for errors.",
                "details": e.details[-4000:]
            }
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.exception("pdflatex could not run")
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to generate PDF", "details": str(e)}
        )
