"""
One-line organization descriptions generated from each organization's website.

For every organization with a website and no description yet: fetch the
home page (retrying once with a 'www.' host), pull out title, meta
description, headings and body text, and ask an OpenAI chat model for a
single 15-25 word sentence.
"""

import logging
import os
import re
import time
from functools import lru_cache
from typing import Callable

import openai
import requests
from bs4 import BeautifulSoup
from dotenv import load_dotenv
from openai import OpenAI

from src.dataset_io.files import generated_at

load_dotenv()

logger = logging.getLogger(__name__)

UA = "Mozilla/5.0 (compatible; OrgDescriptionBot/1.0)"
DEFAULT_MODEL = "gpt-4o-mini"
FETCH_TIMEOUT = 10
MAX_CONTENT_LENGTH = 50000
BODY_EXCERPT = 3000
MAX_HEADINGS = 10
LLM_DELAY = 0.5  # seconds before each LLM call
SAVE_EVERY = 10


@lru_cache(maxsize=1)
def get_client() -> OpenAI:
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise ValueError("OPENAI_API_KEY not found in environment (add it to .env)")
    return OpenAI(api_key=api_key)


def get_model() -> str:
    return os.getenv("OPENAI_MODEL", DEFAULT_MODEL)


def normalize_url(website: str) -> str:
    url = website.strip()
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url


def www_variant(url: str) -> str | None:
    """Same URL with a 'www.' host, or None when it already has one."""
    if "www." in url:
        return None
    return re.sub(r"^(https?://)", r"\1www.", url)


# get html through url
def fetch_html(url: str, timeout: int = FETCH_TIMEOUT) -> str:
    headers = {
        "User-Agent": UA,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
    }
    response = requests.get(url, headers=headers, timeout=timeout)
    response.raise_for_status()
    return response.text[: MAX_CONTENT_LENGTH * 2]


def extract_site_content(html: str) -> dict:
    soup = BeautifulSoup(html, "lxml")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()

    title = soup.title.get_text(strip=True) if soup.title else ""
    meta = soup.find("meta", attrs={"name": re.compile(r"^description$", re.I)})
    meta_desc = meta.get("content", "").strip() if meta else ""
    headings = [h.get_text(strip=True) for h in soup.find_all(["h1", "h2"])]
    headings = [h for h in headings if h][:MAX_HEADINGS]

    text = soup.get_text(separator=" ")
    text = re.sub(r"\s+", " ", text).strip()
    if len(text) > MAX_CONTENT_LENGTH:
        text = text[:MAX_CONTENT_LENGTH] + "..."
    return {"title": title, "metaDescription": meta_desc, "headings": headings, "bodyText": text}


def fetch_site_content(website: str) -> tuple[str, dict]:
    """Fetch and extract `website`, retrying once on the 'www.' host.

    Raises:
        requests.exceptions.RequestException: both attempts failed (first error).
    """
    url = normalize_url(website)
    try:
        return url, extract_site_content(fetch_html(url))
    except requests.exceptions.RequestException as e:
        alt = www_variant(url)
        if alt is None:
            raise
        logger.info(f"Fetch failed for {url} ({e}), trying {alt}")
        try:
            return alt, extract_site_content(fetch_html(alt))
        except requests.exceptions.RequestException:
            raise e


def build_prompt(org: dict, url: str, content: dict) -> str:
    address = org.get("address") or {}
    city, state = address.get("city"), address.get("state")
    if city and state:
        location = f"Location: {city}, {state}"
    elif state:
        location = f"State: {state}"
    else:
        location = ""
    category = f"Category: {org['category']}" if org.get("category") else ""

    return f"""You are writing one-liner descriptions for foster care and child welfare organizations for a directory.

Organization: {org['name']}
{category}
{location}
Website: {url}

Website content:
- Title: {content['title'] or 'N/A'}
- Meta description: {content['metaDescription'] or 'N/A'}
- Key headings: {', '.join(content['headings']) if content['headings'] else 'N/A'}
- Page content excerpt: {content['bodyText'][:BODY_EXCERPT]}

Based on this information, write a single sentence (15-25 words) describing what this organization does in the foster care/child welfare space. Focus on their mission, services, or unique approach. Do not start with the organization name. Do not include quotation marks.

One-liner description:"""


def clean_description(text: str) -> str:
    cleaned = text.strip()
    if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in "\"'":
        cleaned = cleaned[1:-1].strip()
    return cleaned


def generate_description(org: dict, client: OpenAI | None = None) -> dict:
    """Returns {'description': str|None, 'error': str|None}; failures never raise."""
    if not org.get("website"):
        return {"description": None, "error": "No website URL"}
    try:
        url, content = fetch_site_content(org["website"])
    except requests.exceptions.RequestException as e:
        return {"description": None, "error": f"Fetch failed: {e}"}

    try:
        time.sleep(LLM_DELAY)
        response = (client or get_client()).chat.completions.create(
            model=get_model(),
            temperature=0.2,
            max_tokens=150,
            messages=[{"role": "user", "content": build_prompt(org, url, content)}],
        )
        text = response.choices[0].message.content or ""
    except openai.OpenAIError as e:
        return {"description": None, "error": f"API error: {e}"}
    description = clean_description(text)
    if not description:
        return {"description": None, "error": "API error: empty response"}
    return {"description": description, "error": None}


def describe_organizations(
    organizations: list[dict],
    existing: dict | None = None,
    save: Callable[[dict], None] | None = None,
    client: OpenAI | None = None,
) -> dict:
    """Generate descriptions for organizations with a website and no description yet.

    Args:
        organizations: Parsed organizations.
        existing: name -> {description, error} from an earlier run; successes are kept.
        save: Called with the descriptions so far every SAVE_EVERY organizations.

    Returns:
        name -> {description, error}
    """
    descriptions = dict(existing or {})
    todo = [
        o for o in organizations
        if o.get("website") and not (descriptions.get(o["name"]) or {}).get("description")
    ]
    logger.info(f"{len(todo)} of {len(organizations)} organizations need descriptions")

    for i, org in enumerate(todo, start=1):
        print(f"[{i}/{len(todo)}] Processing: {org['name']}")
        result = generate_description(org, client=client)
        descriptions[org["name"]] = result
        if result["description"]:
            print(f"  + {result['description']}")
        else:
            logger.warning(f"{org['name']}: {result['error']}")
        if save is not None and i % SAVE_EVERY == 0:
            save(descriptions)
    return descriptions


def build_descriptions_document(descriptions: dict, source: str) -> dict:
    return {
        "metadata": {
            "source": source,
            "generated": generated_at(),
            "model": get_model(),
            "total": len(descriptions),
            "succeeded": sum(1 for d in descriptions.values() if d.get("description")),
            "failed": sum(1 for d in descriptions.values() if not d.get("description")),
        },
        "descriptions": descriptions,
    }
