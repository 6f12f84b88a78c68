"""
Link resolution for embedded document links.

Documents link to their children through href attributes. Most are already
canonical (https://courses.illinois.edu/cisapp/explorer/...xml), but course
documents still link sections through the internal CIS host without a
suffix:

    http://cis.local/cisapi/schedule/2020/fall/CS/100/30094
 -> https://courses.illinois.edu/cisapp/explorer/schedule/2020/fall/CS/100/30094.xml
"""

from typing import Iterable, Optional, Union
from urllib.parse import quote, urljoin, urlparse

from cisapi.config import get_app_config, get_link_rules
from cisapi.exceptions import LinkResolutionError


class LinkResolver:
    """
    Turns raw links into absolute, fetchable explorer URLs.

    Pure and deterministic: resolving an already canonical link returns it
    unchanged, so resolve(resolve(x)) == resolve(x).

    Usage:
        resolver = LinkResolver()
        url = resolver.resolve("http://cis.local/cisapi/schedule/2020/fall/CS/100/30094")
        url = resolver.resolve(catalog_path(2020, "fall", "CS"))
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        legacy_prefixes: Optional[Iterable[str]] = None,
        suffix: Optional[str] = None
    ):
        """
        Args:
            base_url: Canonical base URL (default: AppConfig.base_url)
            legacy_prefixes: Prefixes rewritten to base_url (default: cisapi/links.yaml)
            suffix: Document suffix (default: cisapi/links.yaml)
        """
        if base_url is None:
            base_url = get_app_config().base_url
        if legacy_prefixes is None or suffix is None:
            rules = get_link_rules()
            if legacy_prefixes is None:
                legacy_prefixes = rules.legacy_prefixes
            if suffix is None:
                suffix = rules.document_suffix

        self.base_url = base_url if base_url.endswith('/') else base_url + '/'
        self.legacy_prefixes = tuple(legacy_prefixes)
        self.suffix = suffix
        self.internal_hosts = frozenset(
            urlparse(prefix).netloc.lower() for prefix in self.legacy_prefixes
        ) - {urlparse(self.base_url).netloc.lower()}

    def resolve(self, link: Optional[str]) -> str:
        """
        Rewrite a raw link into the canonical absolute URL.

        Args:
            link: Link as found in a document, or a base-relative path

        Returns:
            Absolute http(s) URL ending with the document suffix

        Raises:
            LinkResolutionError: If the link is empty, does not resolve to
                an absolute http(s) URL, or still points at an internal host

        Example:
            >>> LinkResolver().resolve('http://cis.local/cisapi/schedule/2020')
            'https://courses.illinois.edu/cisapp/explorer/schedule/2020.xml'
        """
        if link is None or not link.strip():
            raise LinkResolutionError("Cannot resolve an empty link", link=link)

        url = link.strip()

        for prefix in self.legacy_prefixes:
            if url.startswith(prefix):
                url = self.base_url + url[len(prefix):]
                break

        if not urlparse(url).scheme:
            url = urljoin(self.base_url, url.lstrip('/'))

        parsed = urlparse(url)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise LinkResolutionError(
                f"Link does not resolve to an absolute http(s) URL: {link}",
                link=link
            )

        if parsed.netloc.lower() in self.internal_hosts:
            raise LinkResolutionError(
                f"Link points at an internal host outside the known prefixes: {link}",
                link=link
            )

        if self.suffix and not url.endswith(self.suffix):
            url = url + self.suffix

        return url


def catalog_path(*components: Union[str, int]) -> str:
    """
    Build a base-relative document path from identifiers.

    Example:
        >>> catalog_path()
        'schedule.xml'
        >>> catalog_path(2020, 'fall', 'CS', 100)
        'schedule/2020/fall/CS/100.xml'
    """
    parts = ['schedule'] + [quote(str(c).strip(), safe='') for c in components]
    return '/'.join(parts) + '.xml'
