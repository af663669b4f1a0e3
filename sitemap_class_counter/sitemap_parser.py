import logging
from typing import List, Union

from lxml import etree

from sitemap_class_counter.errors import ParseError

logger = logging.getLogger(__name__)


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def _children(element: etree._Element, name: str) -> List[etree._Element]:
    # Comments and processing instructions have non-string tags
    return [
        child for child in element
        if isinstance(child.tag, str) and _local_name(child) == name
    ]


def _invalid(root: etree._Element, sitemap_url: str) -> ParseError:
    dump = etree.tostring(root, pretty_print=True).decode("utf-8", errors="replace")
    logger.warning(f"Unexpected sitemap structure from {sitemap_url}:\n{dump}")
    return ParseError(sitemap_url, f"Invalid sitemap format for {sitemap_url}", dump=dump)


def parse_urlset(xml_content: Union[bytes, str], sitemap_url: str = "") -> List[str]:
    """
    Parses a urlset sitemap and returns the page URLs in document order.

    Element names are matched by local name, so the sitemaps.org namespace is
    optional.

    Args:
        xml_content: The raw sitemap body. Bytes are decoded per the XML
            encoding declaration; str is treated as already decoded.
        sitemap_url: The URL from which this sitemap was fetched (for logging/context).

    Raises:
        ParseError: the content is not well-formed XML, the root is not a
            urlset, the urlset has no url entries, or an entry has no loc.
    """
    if not xml_content or not xml_content.strip():
        raise ParseError(sitemap_url, f"Empty sitemap content from {sitemap_url}")

    if isinstance(xml_content, str):
        # lxml rejects str input that carries an encoding declaration
        xml_content = xml_content.encode("utf-8")

    # Sitemaps are remote input: no entity expansion, no network lookups
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(xml_content, parser=parser)
    except etree.XMLSyntaxError as e:
        raise ParseError(sitemap_url, f"XML syntax error in sitemap {sitemap_url}: {e}") from e

    if _local_name(root) != "urlset":
        raise _invalid(root, sitemap_url)

    url_elements = _children(root, "url")
    if not url_elements:
        raise _invalid(root, sitemap_url)

    page_urls = []
    for url_element in url_elements:
        loc_elements = _children(url_element, "loc")
        if not loc_elements:
            raise _invalid(root, sitemap_url)
        page_urls.append((loc_elements[0].text or "").strip())

    logger.debug(f"Extracted {len(page_urls)} URL entries from urlset {sitemap_url}.")
    return page_urls
