"""
Google Books search for topic reading lists.
Works without a key (public quota); empty results or failures fall back
to two static suggestions.
"""

import os
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

GOOGLE_BOOKS_URL = "https://www.googleapis.com/books/v1/volumes"
PLACEHOLDER_KEY = "YOUR_GOOGLE_BOOKS_API_KEY_HERE"
QUERY_SUFFIX = " programming OR computer science OR tutorial OR guide"


def _q(value: str) -> str:
    return quote(value, safe="")


def _alternative_sources(title: str, first_author: str, isbn: str) -> Dict[str, str]:
    if isbn:
        return {
            "openLibrary": f"https://openlibrary.org/isbn/{isbn}",
            "archive": f"https://archive.org/search.php?query={_q(f'{title} {first_author}')}",
            "worldcat": f"https://www.worldcat.org/search?q={_q(title)}",
        }
    return {
        "openLibrary": f"https://openlibrary.org/search?q={_q(title)}",
        "archive": f"https://archive.org/search.php?query={_q(title)}",
        "worldcat": f"https://www.worldcat.org/search?q={_q(title)}",
    }


def parse_volume(item: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten a Google Books volume into the book shape the frontend expects."""
    info = item.get("volumeInfo") or {}
    sale = item.get("saleInfo") or {}
    access = item.get("accessInfo") or {}
    pdf = access.get("pdf") or {}
    epub = access.get("epub") or {}

    identifiers = {i.get("type"): i.get("identifier") for i in info.get("industryIdentifiers") or []}
    isbn = identifiers.get("ISBN_13") or identifiers.get("ISBN_10") or ""

    formats = []
    if pdf.get("isAvailable"):
        formats.append("PDF")
    if epub.get("isAvailable"):
        formats.append("EPUB")
    if info.get("printType") == "BOOK":
        formats.append("Print")

    download_links = {}
    if pdf.get("acsTokenLink"):
        download_links["pdf"] = pdf["acsTokenLink"]
    if epub.get("acsTokenLink"):
        download_links["epub"] = epub["acsTokenLink"]
    if pdf.get("downloadLink"):
        download_links["pdfDownload"] = pdf["downloadLink"]
    if epub.get("downloadLink"):
        download_links["epubDownload"] = epub["downloadLink"]

    title = info.get("title") or ""
    authors = info.get("authors") or []
    images = info.get("imageLinks") or {}
    list_price = sale.get("listPrice")

    return {
        "id": item.get("id"),
        "title": title or "Unknown Title",
        "authors": authors or ["Unknown Author"],
        "publisher": info.get("publisher") or "Unknown Publisher",
        "publishedDate": info.get("publishedDate") or "Unknown",
        "description": info.get("description") or "No description available.",
        "pageCount": info.get("pageCount") or 0,
        "categories": info.get("categories") or [],
        "averageRating": info.get("averageRating") or 0,
        "ratingsCount": info.get("ratingsCount") or 0,
        "thumbnail": images.get("thumbnail") or images.get("smallThumbnail") or "",
        "previewLink": info.get("previewLink") or "",
        "infoLink": info.get("infoLink") or "",
        "buyLink": sale.get("buyLink") or "",
        "isEbook": bool(sale.get("isEbook")),
        "price": f"{list_price['amount']} {list_price['currencyCode']}" if list_price else "N/A",
        "isbn": isbn,
        "formats": formats,
        "downloadLinks": download_links,
        "alternativeSources": _alternative_sources(title, authors[0] if authors else "", isbn),
        "accessViewStatus": access.get("accessViewStatus") or "NONE",
        "publicDomain": bool(access.get("publicDomain")),
    }


class BooksService:
    """Search books; never raises to the caller"""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.transport = transport

    async def search_books(self, query: str, max_results: int = 10) -> List[Dict[str, Any]]:
        params = {
            "q": f"{query}{QUERY_SUFFIX}",
            "maxResults": max_results,
            "orderBy": "relevance",
            "printType": "books",
            "langRestrict": "en",
        }
        api_key = os.getenv("GOOGLE_BOOKS_API_KEY")
        if api_key and api_key != PLACEHOLDER_KEY:
            params["key"] = api_key

        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=15.0) as client:
                response = await client.get(GOOGLE_BOOKS_URL, params=params)
                response.raise_for_status()
                items = response.json().get("items") or []
            if not items:
                logger.warning(f"No books found for '{query}', returning mock books")
                return self.mock_books(query)
            books = [parse_volume(item) for item in items]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Books search failed for '{query}', returning mock books: {e}")
            return self.mock_books(query)

        logger.info(f"Found {len(books)} books for '{query}'")
        return books

    @staticmethod
    def mock_books(query: str) -> List[Dict[str, Any]]:
        search_link = f"https://www.google.com/search?q={_q(query + ' book')}"
        sources = _alternative_sources(query, "", "")
        return [
            {
                "id": "mock1",
                "title": f"Complete Guide to {query}",
                "authors": ["Expert Author"],
                "publisher": "Educational Press",
                "publishedDate": "2024",
                "description": f"A comprehensive guide covering all aspects of {query}. Perfect for beginners and advanced learners alike.",
                "pageCount": 450,
                "categories": ["Education", "Technology"],
                "averageRating": 4.5,
                "ratingsCount": 125,
                "thumbnail": "https://via.placeholder.com/128x192/4A90E2/FFFFFF?text=Book",
                "previewLink": search_link,
                "infoLink": search_link,
                "buyLink": "",
                "isEbook": True,
                "price": "N/A",
                "isbn": "",
                "formats": ["PDF", "EPUB"],
                "downloadLinks": {},
                "alternativeSources": dict(sources),
                "accessViewStatus": "NONE",
                "publicDomain": False,
            },
            {
                "id": "mock2",
                "title": f"{query}: From Basics to Advanced",
                "authors": ["John Doe", "Jane Smith"],
                "publisher": "Tech Books",
                "publishedDate": "2023",
                "description": f"Master {query} with this step-by-step guide that takes you from foundational concepts to advanced techniques.",
                "pageCount": 320,
                "categories": ["Education"],
                "averageRating": 4.2,
                "ratingsCount": 89,
                "thumbnail": "https://via.placeholder.com/128x192/E24A90/FFFFFF?text=Book",
                "previewLink": search_link,
                "infoLink": search_link,
                "buyLink": "",
                "isEbook": False,
                "price": "N/A",
                "isbn": "",
                "formats": ["Print"],
                "downloadLinks": {},
                "alternativeSources": dict(sources),
                "accessViewStatus": "NONE",
                "publicDomain": False,
            },
        ]
