"""
Logo acquisition.

The renderer only depends on ``LogoProvider.fetch()``. The default provider
is a chain: the local logo folder first, then the public site over HTTP.
Every candidate is decoded with Pillow before it is accepted, and the decoded
image travels with it. A corrupt file falls through to the next candidate
instead of breaking the render.
"""

import logging
import os
from collections import namedtuple

import httpx

from . import config
from .images import embed_image

logger = logging.getLogger(__name__)

# data: encoded bytes; format: "PNG" | "JPEG"; source: path or URL it came from;
# image: the decoded ``Embedded`` once a candidate has been accepted
LogoImage = namedtuple("LogoImage", "data format source image", defaults=(None,))


def format_for(filename):
    return "PNG" if filename.lower().endswith(".png") else "JPEG"


def _accept(data, filename, source):
    try:
        image = embed_image(data)
    except ValueError as ex:
        logger.info("Failed to embed logo %s, trying next: %s", source, ex)
        return None
    return LogoImage(data, format_for(filename), source, image)


class LogoProvider:
    def fetch(self):
        """Return a ``LogoImage`` or ``None`` when no logo is available."""
        raise NotImplementedError


class NoLogo(LogoProvider):
    def fetch(self):
        return None


class StaticLogo(LogoProvider):
    """A logo already held in memory."""

    def __init__(self, data, fmt="PNG", source="<memory>"):
        self.logo = LogoImage(data, fmt, source)

    def fetch(self):
        return self.logo


class FilesystemLogo(LogoProvider):
    def __init__(self, directory, filenames=config.LOGO_FILES):
        self.directory = directory
        self.filenames = filenames

    def fetch(self):
        for name in self.filenames:
            path = os.path.join(self.directory, name)
            if not os.path.isfile(path):
                continue
            try:
                with open(path, "rb") as fh:
                    data = fh.read()
            except OSError as ex:
                logger.info("Cannot read logo %s: %s", path, ex)
                continue
            logo = _accept(data, name, path)
            if logo:
                logger.debug("Embedded logo from local file %s", path)
                return logo
        return None


class HttpLogo(LogoProvider):
    """
    Fetch the logo from the deployed site.

    Each filename is tried against every base URL before moving on to the
    next filename. Every request is bounded by ``timeout`` seconds.
    """

    def __init__(self, base_urls, filenames=config.LOGO_FILES,
                 timeout=config.LOGO_TIMEOUT, transport=None):
        self.base_urls = list(base_urls)
        self.filenames = filenames
        self.timeout = timeout
        self.transport = transport

    def fetch(self):
        if not self.base_urls:
            return None
        with httpx.Client(timeout=self.timeout, transport=self.transport,
                          follow_redirects=True) as client:
            for name in self.filenames:
                for base in self.base_urls:
                    url = f"{base.rstrip('/')}/{name}"
                    try:
                        res = client.get(url)
                    except httpx.HTTPError as ex:
                        logger.info("Failed to fetch %s, trying next: %s", url, ex)
                        continue
                    if res.status_code != 200:
                        continue
                    logo = _accept(res.content, name, url)
                    if logo:
                        logger.debug("Embedded logo from URL %s", url)
                        return logo
        return None


class ChainedLogo(LogoProvider):
    """Try each provider in order; the first logo found wins."""

    def __init__(self, *providers):
        self.providers = providers

    def fetch(self):
        for provider in self.providers:
            logo = provider.fetch()
            if logo:
                return logo
        logger.warning("Logo not found; continuing without embedding logo")
        return None


def default_logo_provider():
    return ChainedLogo(
        FilesystemLogo(config.LOGO_DIR),
        HttpLogo(config.logo_base_urls()),
    )
