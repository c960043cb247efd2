"""Unit tests for outlook providers, caching and enrichment."""

import logging
from unittest.mock import MagicMock, Mock

import pytest
import requests

from career_outlooks.config import ConfigurationError
from career_outlooks.config.environment import EnvironmentConfig
from career_outlooks.config.models import AppConfig
from career_outlooks.domain.models import OccupationRef, Outlook
from career_outlooks.matching.models import MatchResult
from career_outlooks.outlooks import (
    LmiOutlookClient,
    OutlookHTTPError,
    OutlookProvider,
    OutlookResponseError,
    OutlookService,
    OutlookTimeoutError,
    StaticOutlookProvider,
    TTLCache,
    get_outlook_provider,
    outlook_from_record,
    remap_potential,
    verbose_outlook,
)


# ============================================================================
# Fixtures
# ============================================================================


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def make_response(status_code=200, payload=None, json_error=False):
    response = Mock()
    response.status_code = status_code
    response.reason = "Not Found" if status_code == 404 else "Error"
    if json_error:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def session():
    mock_session = MagicMock(spec=requests.Session)
    mock_session.headers = {}
    return mock_session


@pytest.fixture
def client(session):
    return LmiOutlookClient(
        user_key="secret",
        base_url="https://lmi.example.test/gcapis/",
        region_id=59,
        timeout=10,
        session=session,
    )


def make_match(noc, occupation, items=("item",)):
    return MatchResult(
        unit_group=OccupationRef(noc=noc, occupation=occupation),
        requirements=tuple(items),
        items=tuple(items),
    )


# ============================================================================
# Potential remap
# ============================================================================


class TestPotential:
    @pytest.mark.parametrize(
        "raw,expected",
        [(1, 3), (2, 1), (3, 2), (0, 0), (4, 0), ("1", 3), ("abc", 0), (None, 0)],
    )
    def test_remap(self, raw, expected):
        assert remap_potential(raw) == expected

    @pytest.mark.parametrize("potential,label", [(0, "Undetermined"), (1, "Limited"), (2, "Fair"), (3, "Good"), (9, "Undetermined")])
    def test_verbose(self, potential, label):
        assert verbose_outlook(potential) == label

    def test_outlook_from_record(self):
        outlook = outlook_from_record(
            {"noc": 7237, "potential": 1, "title": "Welders", "trends": "Growing"}, region_id=59
        )

        assert outlook == Outlook(
            noc="7237",
            potential=3,
            outlook_verbose="Good",
            title="Welders",
            trends="Growing",
            region_id=59,
        )

    def test_record_region_wins(self):
        outlook = outlook_from_record({"noc": "1", "potential": 2, "region_id": 12}, region_id=59)
        assert outlook.region_id == 12

    @pytest.mark.parametrize("record", [{"noc": "1"}, {"noc": "1", "potential": ""}, {"potential": 1}])
    def test_missing_fields_raise(self, record):
        with pytest.raises(OutlookResponseError):
            outlook_from_record(record)


# ============================================================================
# TTL cache
# ============================================================================


class TestTTLCache:
    def test_set_and_get(self):
        cache = TTLCache(60)
        cache.set("k", "v")

        assert cache.get("k") == "v"
        assert cache.has("k")
        assert len(cache) == 1

    def test_missing_key(self):
        cache = TTLCache(60)
        assert cache.get("missing") is None
        assert not cache.has("missing")

    def test_none_value_is_an_entry(self):
        cache = TTLCache(60)
        cache.set("k", None)

        assert cache.has("k")
        assert cache.get("k", "fallback") is None
        assert cache.get("other", "fallback") == "fallback"

    def test_expiry(self):
        clock = FakeClock()
        cache = TTLCache(60, clock=clock)
        cache.set(("7237", 59), "outlook")

        clock.now = 59.9
        assert cache.get(("7237", 59)) == "outlook"

        clock.now = 60
        assert cache.get(("7237", 59)) is None
        assert not cache.has(("7237", 59))
        assert len(cache) == 0

    def test_set_resets_expiry(self):
        clock = FakeClock()
        cache = TTLCache(10, clock=clock)
        cache.set("k", 1)
        clock.now = 8
        cache.set("k", 2)
        clock.now = 15

        assert cache.get("k") == 2

    def test_delete_and_clear(self):
        cache = TTLCache(60)
        cache.set("a", 1)
        cache.set("b", 2)

        cache.delete("a")
        cache.delete("never-set")
        assert cache.get("a") is None

        cache.clear()
        assert len(cache) == 0

    @pytest.mark.parametrize("ttl", [0, -1])
    def test_ttl_must_be_positive(self, ttl):
        with pytest.raises(ValueError):
            TTLCache(ttl)


# ============================================================================
# Static provider
# ============================================================================


class TestStaticOutlookProvider:
    def test_lookup(self):
        provider = StaticOutlookProvider([{"noc": "7237", "potential": 1}])

        assert provider.get_outlook("7237").outlook_verbose == "Good"
        assert provider.get_outlook(7237).potential == 3
        assert provider.get_outlook("0000") is None

    def test_other_regions_skipped(self):
        provider = StaticOutlookProvider(
            [{"noc": "7241", "potential": 1, "region_id": 12}], region_id=59
        )
        assert provider.get_outlook("7241") is None

    def test_region_specific_record_preferred(self):
        provider = StaticOutlookProvider(
            [
                {"noc": "7241", "potential": 3},
                {"noc": "7241", "potential": 1, "region_id": 59},
            ],
            region_id=59,
        )
        outlook = provider.get_outlook("7241")

        assert outlook.potential == 3
        assert outlook.region_id == 59

    def test_is_an_outlook_provider(self):
        assert isinstance(StaticOutlookProvider([]), OutlookProvider)

    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            OutlookProvider()


# ============================================================================
# LMI client
# ============================================================================


class TestLmiOutlookClient:
    def test_init_sets_headers(self, client, session):
        assert session.headers["USER_KEY"] == "secret"
        assert session.headers["User-Agent"] == "CareerOutlooks/1.0"
        assert client.base_url == "https://lmi.example.test/gcapis"

    def test_init_rejects_empty_key(self, session):
        with pytest.raises(ValueError, match="user_key"):
            LmiOutlookClient(user_key="  ", session=session)

    @pytest.mark.parametrize("timeout", [4, 301])
    def test_init_rejects_timeout(self, session, timeout):
        with pytest.raises(ValueError, match="Timeout"):
            LmiOutlookClient(user_key="k", timeout=timeout, session=session)

    def test_get_outlook(self, client, session):
        session.get.return_value = make_response(
            payload={"potential": 3, "title": "Electricians", "trends": "Stable"}
        )

        outlook = client.get_outlook("7241")

        session.get.assert_called_once_with(
            "https://lmi.example.test/gcapis/outlooks",
            params={"noc": "7241", "rtp": "1", "rid": "59", "lang": "en"},
            timeout=10,
        )
        assert outlook.noc == "7241"
        assert outlook.potential == 2
        assert outlook.outlook_verbose == "Fair"
        assert outlook.trends == "Stable"
        assert outlook.region_id == 59

    def test_list_payload_uses_first_entry(self, client, session):
        session.get.return_value = make_response(payload=[{"potential": 2}, {"potential": 1}])
        assert client.get_outlook("4214").outlook_verbose == "Limited"

    def test_empty_list_payload(self, client, session):
        session.get.return_value = make_response(payload=[])
        with pytest.raises(OutlookResponseError, match="Expected JSON object"):
            client.get_outlook("4214")

    def test_missing_potential(self, client, session):
        session.get.return_value = make_response(payload={"title": "Welders"})
        with pytest.raises(OutlookResponseError, match="potential"):
            client.get_outlook("7237")

    def test_not_found_returns_none(self, client, session):
        session.get.return_value = make_response(status_code=404)
        assert client.get_outlook("0000") is None

    def test_server_error(self, client, session):
        session.get.return_value = make_response(status_code=503)

        with pytest.raises(OutlookHTTPError) as exc_info:
            client.get_outlook("7237")

        assert exc_info.value.status_code == 503
        assert exc_info.value.url == "https://lmi.example.test/gcapis/outlooks"

    def test_timeout(self, client, session):
        session.get.side_effect = requests.exceptions.Timeout()
        with pytest.raises(OutlookTimeoutError):
            client.get_outlook("7237")

    def test_connection_error(self, client, session):
        session.get.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(OutlookHTTPError) as exc_info:
            client.get_outlook("7237")

        assert exc_info.value.status_code == 0

    def test_invalid_json(self, client, session):
        session.get.return_value = make_response(json_error=True)
        with pytest.raises(OutlookResponseError, match="Failed to parse JSON"):
            client.get_outlook("7237")

    def test_cache_prevents_second_request(self, session):
        cache = TTLCache(3600)
        client = LmiOutlookClient(user_key="k", cache=cache, session=session)
        session.get.return_value = make_response(payload={"potential": 1})

        first = client.get_outlook("7237")
        second = client.get_outlook("7237")

        assert first == second
        assert session.get.call_count == 1
        assert cache.has(("7237", 59))

    def test_not_found_is_cached(self, session):
        cache = TTLCache(3600)
        client = LmiOutlookClient(user_key="k", cache=cache, session=session)
        session.get.return_value = make_response(status_code=404)

        assert client.get_outlook("0000") is None
        assert client.get_outlook("0000") is None

        assert session.get.call_count == 1
        assert cache.has(("0000", 59))
        assert cache.get(("0000", 59)) is None

    def test_server_error_is_not_cached(self, session):
        cache = TTLCache(3600)
        client = LmiOutlookClient(user_key="k", cache=cache, session=session)
        session.get.return_value = make_response(status_code=500)

        with pytest.raises(OutlookHTTPError):
            client.get_outlook("7237")

        assert len(cache) == 0


# ============================================================================
# Enrichment service
# ============================================================================


class TestOutlookService:
    @pytest.fixture
    def provider(self):
        return StaticOutlookProvider(
            [{"noc": "7237", "potential": 1}, {"noc": "4214", "potential": 2}]
        )

    def test_enrich(self, provider):
        service = OutlookService(provider)
        results = service.enrich([make_match("7237", "Welders", ("Welding certificate.",))])

        assert len(results) == 1
        assert results[0].model_dump() == {
            "noc": "7237",
            "title": "Welders",
            "outlook": "Good",
            "potential": 3,
            "items": ["Welding certificate."],
        }

    def test_missing_outlook_dropped_with_warning(self, provider, caplog):
        service = OutlookService(provider)

        with caplog.at_level(logging.WARNING):
            results = service.enrich(
                [make_match("3012", "Nurses"), make_match("4214", "Early childhood educators")]
            )

        assert [r.noc for r in results] == ["4214"]
        assert "Outlook not found for NOC 3012" in caplog.text

    def test_provider_error_dropped(self):
        provider = Mock(spec=OutlookProvider)
        provider.get_outlook.side_effect = [OutlookTimeoutError("slow", url="u"), Outlook(noc="2", potential=0)]
        logger = Mock()
        service = OutlookService(provider, logger_instance=logger)

        results = service.enrich([make_match("1", "A"), make_match("2", "B")])

        assert [r.outlook for r in results] == ["Undetermined"]
        logger.error.assert_called_once()
        assert logger.error.call_args.kwargs["extra"]["error_type"] == "OutlookTimeoutError"

    def test_empty_input(self, provider):
        assert OutlookService(provider).enrich([]) == []


# ============================================================================
# Factory
# ============================================================================


class TestGetOutlookProvider:
    def test_static(self, app_config, env_config):
        provider = get_outlook_provider(app_config, env_config)

        assert isinstance(provider, StaticOutlookProvider)
        assert provider.get_outlook("7241").potential == 2

    def test_lmi(self):
        app_config = AppConfig(
            data={"unit_groups_path": "ug.json", "programs_path": "p.json"},
            outlooks={"source": "lmi", "cache_ttl": "2h", "http_request_timeout": 15},
        )
        provider = get_outlook_provider(app_config, EnvironmentConfig(lmi_api_user_key="key"))

        assert isinstance(provider, LmiOutlookClient)
        assert provider.timeout == 15
        assert provider.region_id == 59
        assert provider.cache.ttl_seconds == 7200

    def test_lmi_uses_given_cache(self):
        app_config = AppConfig(
            data={"unit_groups_path": "ug.json", "programs_path": "p.json"},
            outlooks={"source": "lmi"},
        )
        cache = TTLCache(60)

        provider = get_outlook_provider(app_config, EnvironmentConfig(lmi_api_user_key="key"), cache=cache)

        assert provider.cache is cache

    def test_lmi_without_key(self):
        app_config = AppConfig(
            data={"unit_groups_path": "ug.json", "programs_path": "p.json"},
            outlooks={"source": "lmi"},
        )
        with pytest.raises(ConfigurationError, match="LMI_API_USER_KEY"):
            get_outlook_provider(app_config, EnvironmentConfig())
