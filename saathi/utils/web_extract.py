import logging
import re

import httpx
from bs4 import BeautifulSoup
from fastapi import HTTPException
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from saathi.utils.text_utils import collapse_whitespace, is_http_url

logger = logging.getLogger(__name__)

_NOISE = "script, style, nav, footer, header, aside, .advertisement, .ads"
_CONTENT = (
    "h1, h2, h3, h4, h5, h6, p, li, blockquote, article, section, "
    "div.content, div.main, main"
)


def html_to_text(html: str) -> str:
    """
    Texte lisible d'une page : titres, paragraphes, listes... sinon tout le <body>.
    """
    soup = BeautifulSoup(html, "html.parser")
    for el in soup.select(_NOISE):
        el.decompose()

    text = ""
    for el in soup.select(_CONTENT):
        el_text = el.get_text().strip()
        if len(el_text) > 10:  # ignore les fragments très courts
            text += el_text + "\n"

    if len(text) < 100:
        body = soup.body or soup
        text = re.sub(r"\s+", " ", body.get_text()).strip()

    return collapse_whitespace(text)


def fetch_html(client: httpx.Client, url: str) -> str:
    try:
        response = client.get(url)
        response.raise_for_status()
    except httpx.TimeoutException:
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST,
            detail="Request timeout - website took too long to respond",
        )
    except httpx.ConnectError:
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST,
            detail="Website not found or unreachable",
        )
    except httpx.HTTPStatusError as e:
        code = e.response.status_code
        if code == 403:
            raise HTTPException(
                status_code=HTTP_400_BAD_REQUEST,
                detail="Access forbidden - website blocks automated requests",
            )
        if code == 404:
            raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Page not found")
        logger.warning("GET %s -> HTTP %s", url, code)
        raise HTTPException(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch content from URL",
        )
    except httpx.HTTPError as e:
        logger.warning("GET %s failed: %s", url, e)
        raise HTTPException(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch content from URL",
        )
    return response.text


def extract_url_text(client: httpx.Client, url: str) -> str:
    """
    Télécharge une page web et renvoie son texte nettoyé (>= 50 caractères).
    """
    url = (url or "").strip()
    if not url:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="No URL provided")
    if not is_http_url(url):
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="Invalid URL format")

    text = html_to_text(fetch_html(client, url))
    if len(text) < 50:
        raise HTTPException(
            status_code=HTTP_400_BAD_REQUEST,
            detail="No meaningful content found on the webpage",
        )
    return text
