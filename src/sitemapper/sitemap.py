"""
Serialization of crawl results as a sitemaps.org 0.9 document.
"""
from __future__ import annotations

from typing import Iterable
from xml.etree import ElementTree as ET

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'


def build_sitemap(urls: Iterable[str]) -> ET.Element:
    """Build a <urlset> element with one <url><loc> entry per URL, in order."""
    urlset = ET.Element("urlset", xmlns=SITEMAP_NAMESPACE)
    for url in urls:
        entry = ET.SubElement(urlset, "url")
        ET.SubElement(entry, "loc").text = url
    return urlset


def render_sitemap(urls: Iterable[str]) -> str:
    """Render URLs as an indented sitemap XML document."""
    urlset = build_sitemap(urls)
    ET.indent(urlset, space="  ")
    return XML_HEADER + ET.tostring(urlset, encoding="unicode") + "\n"
