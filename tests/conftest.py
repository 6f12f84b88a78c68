"""
Shared pytest fixtures.

Recorded explorer documents live in tests/data/. The fake transport serves
them by URL so that no test touches the network.
"""

from pathlib import Path
from typing import Dict
from unittest.mock import Mock

import pytest

import cisapi.config as config_module
from cisapi.exceptions import TransportError
from cisapi.parsers.links import LinkResolver


DATA_DIR = Path(__file__).parent / 'data'
BASE_URL = "https://courses.illinois.edu/cisapp/explorer/"


def load(name: str) -> str:
    """Read a recorded document from tests/data/."""
    return (DATA_DIR / name).read_text(encoding='utf-8')


@pytest.fixture(autouse=True)
def reset_config_singletons(monkeypatch):
    """Every test starts from fresh config singletons and no CISAPI_ env."""
    for var in ('CISAPI_BASE_URL', 'CISAPI_REQUEST_TIMEOUT', 'CISAPI_USER_AGENT', 'CISAPI_MAX_WORKERS'):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(config_module, '_app_config', None)
    monkeypatch.setattr(config_module, '_link_rules', None)
    yield


@pytest.fixture
def resolver():
    """Resolver with explicit rules (independent of links.yaml)."""
    return LinkResolver(
        base_url=BASE_URL,
        legacy_prefixes=["http://cis.local/cisapi/"],
        suffix=".xml"
    )


@pytest.fixture
def pages() -> Dict[str, str]:
    """Recorded documents keyed by canonical URL."""
    return {
        BASE_URL + "schedule.xml": load("schedule.xml"),
        BASE_URL + "schedule/2020.xml": load("schedule_2020.xml"),
        BASE_URL + "schedule/2020/fall.xml": load("schedule_2020_fall.xml"),
        BASE_URL + "schedule/2020/fall/CS.xml": load("schedule_2020_fall_CS.xml"),
        BASE_URL + "schedule/2020/fall/CS/100.xml": load("schedule_2020_fall_CS_100.xml"),
        BASE_URL + "schedule/2020/fall/CS/100/30094.xml": load("schedule_2020_fall_CS_100_30094.xml"),
    }


@pytest.fixture
def transport(pages):
    """Mock transport answering from `pages`; unknown URLs fail with HTTP 404."""
    mock = Mock()

    def get(url):
        if url not in pages:
            raise TransportError(f"GET {url} returned HTTP 404", url=url, status_code=404)
        return pages[url]

    mock.get = Mock(side_effect=get)
    return mock
