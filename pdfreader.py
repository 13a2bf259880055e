import logging
import re
from typing import Dict, List, Optional

from pypdf import PdfReader

from kmp import build_failure_function, iter_matches

logger = logging.getLogger("app")


def parse_pdf_to_pages_text(file_path: str) -> Optional[List[str]]:
    """
    parses a PDF file and extracts text from each page.
    returns a list of strings, where each string is the text of a page.
    pages without extractable text (e.g. image-only pages) are empty strings.
    """
    pages_text_content = []
    try:
        reader = PdfReader(file_path)
        num_pages = len(reader.pages)
        logger.info(f"Extracting text from {num_pages} pages of '{file_path}'")
        for i, page in enumerate(reader.pages):
            text = page.extract_text()

            if text:
                text = re.sub(r'\s+', ' ', text).strip()
                pages_text_content.append(text)
            else:
                # Keep the page so numbering stays aligned, but give it nothing to match
                logger.info(f"Page {i+1} of '{file_path}' has no extractable text (image-only page?)")
                pages_text_content.append("")

    except FileNotFoundError:
        logger.error(f"PDF Document not found at {file_path}")
        return None
    except Exception as e:
        logger.error(f"Error parsing PDF document '{file_path}': {e}")
        return None
    return pages_text_content


def search_pages(pages: List[str], pattern: str) -> Dict[int, List[int]]:
    """
    Search every page for pattern. Returns a mapping of 1-based page number
    to match positions; pages without a match are left out.
    """
    if not pattern:
        return {}
    # The table depends only on the pattern, so build it once for all pages
    lps = build_failure_function(pattern)
    found: Dict[int, List[int]] = {}
    for page_number, page_text in enumerate(pages, start=1):
        positions = list(iter_matches(page_text, pattern, lps))
        if positions:
            found[page_number] = positions
    return found
