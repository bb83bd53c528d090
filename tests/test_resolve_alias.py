"""
Unit tests for alias parsing in social.graze.cryptalias.resolve.alias

Tests cover alias splitting, ticker prefix validation and normalization, and
the percent-encoding used to build resolver URLs.
"""

import pytest

from social.graze.cryptalias.errors import FormatError, MismatchError
from social.graze.cryptalias.resolve.alias import (
    ParsedAlias,
    normalize_ticker,
    parse_alias,
    percent_encode,
)


class TestNormalizeTicker:
    """Test suite for normalize_ticker function."""

    def test_lowercases(self):
        """Test tickers are lower-cased."""
        assert normalize_ticker("BTC") == "btc"

    def test_strips_all_whitespace(self):
        """Test whitespace is removed everywhere, not only at the ends."""
        assert normalize_ticker("  B t\tC\n") == "btc"

    @pytest.mark.parametrize("value", ["BTC", " xMr ", "e t h", "usdt.trc20", ""])
    def test_idempotent(self, value):
        """Test normalizing twice gives the same result as normalizing once."""
        once = normalize_ticker(value)
        assert normalize_ticker(once) == once


class TestParseAlias:
    """Test suite for parse_alias function."""

    def test_with_prefix(self):
        """Test alias with ticker prefix splits into all parts."""
        parsed = parse_alias("btc:alice$example.com", "btc")
        assert parsed == ParsedAlias(
            alias="btc:alice$example.com",
            ticker="btc",
            ticker_prefix="btc",
            local_part="alice",
            domain="example.com",
        )

    def test_without_prefix(self):
        """Test alias without colon has no prefix."""
        parsed = parse_alias("alice$example.com", "btc")
        assert parsed.ticker_prefix is None
        assert parsed.local_part == "alice"
        assert parsed.domain == "example.com"

    @pytest.mark.parametrize(
        "prefix,local,domain",
        [
            ("btc", "alice", "example.com"),
            ("xmr", "bob+tips", "wallets.example.org"),
            ("eth", "c.d-e", "x.io"),
        ],
    )
    def test_valid_aliases(self, prefix, local, domain):
        """Test valid prefixed aliases return (prefix, local, domain)."""
        parsed = parse_alias(f"{prefix}:{local}${domain}", prefix)
        assert (parsed.ticker_prefix, parsed.local_part, parsed.domain) == (
            prefix,
            local,
            domain,
        )

    def test_domain_after_last_dollar(self):
        """Test the domain is taken after the last dollar sign."""
        parsed = parse_alias("al$ice$example.com", "btc")
        assert parsed.local_part == "al$ice"
        assert parsed.domain == "example.com"

    def test_local_part_unmodified(self):
        """Test the local part keeps its case and tag."""
        parsed = parse_alias("Alice+Tips$example.com", "btc")
        assert parsed.local_part == "Alice+Tips"

    def test_original_alias_kept(self):
        """Test the unnormalized alias is kept for the resolver URL."""
        parsed = parse_alias("BTC:Alice$Example.com", "btc")
        assert parsed.alias == "BTC:Alice$Example.com"

    @pytest.mark.parametrize("alias", ["alice", "alice.example.com", "btc:alice@x.com"])
    def test_missing_dollar(self, alias):
        """Test aliases without dollar sign fail with FormatError."""
        with pytest.raises(FormatError):
            parse_alias(alias, "btc")

    @pytest.mark.parametrize("alias", ["alice$", "btc:alice$", "$"])
    def test_trailing_dollar(self, alias):
        """Test aliases ending in dollar sign fail with FormatError."""
        with pytest.raises(FormatError):
            parse_alias(alias, "btc")

    @pytest.mark.parametrize(
        "alias",
        [
            ":alice$example.com",
            "btc:$example.com",
            "btc:al:ice$example.com",
            "btc::alice$example.com",
        ],
    )
    def test_bad_colon_arrangement(self, alias):
        """Test misplaced or repeated colons fail with FormatError."""
        with pytest.raises(FormatError):
            parse_alias(alias, "btc")

    def test_colon_in_domain_is_not_a_prefix(self):
        """Test colons after the dollar sign are part of the domain."""
        parsed = parse_alias("alice$example.com:8443", "btc")
        assert parsed.ticker_prefix is None
        assert parsed.domain == "example.com:8443"

    def test_prefix_case_and_whitespace_insensitive(self):
        """Test prefix comparison ignores case and whitespace."""
        parsed = parse_alias("BTC:alice$x.com", "btc")
        assert parsed.ticker_prefix == "btc"
        parsed = parse_alias(" b TC :alice$x.com", " BTC ")
        assert parsed.ticker == "btc"

    def test_prefix_mismatch(self):
        """Test a prefix for another ticker fails with MismatchError."""
        with pytest.raises(MismatchError) as exc_info:
            parse_alias("BTC:alice$x.com", "eth")
        assert exc_info.value.prefix == "btc"
        assert exc_info.value.ticker == "eth"
        assert '"btc"' in exc_info.value.message
        assert '"eth"' in exc_info.value.message

    def test_whitespace_only_prefix_ignored(self):
        """Test a prefix made of whitespace is not compared."""
        parsed = parse_alias(" :alice$x.com", "eth")
        assert parsed.ticker_prefix is None
        assert parsed.local_part == "alice"

    @pytest.mark.parametrize(
        "alias,ticker", [("", "btc"), ("alice$x.com", ""), ("alice$x.com", "  ")]
    )
    def test_required_inputs(self, alias, ticker):
        """Test empty alias or ticker fails with FormatError."""
        with pytest.raises(FormatError) as exc_info:
            parse_alias(alias, ticker)
        assert exc_info.value.message == "ticker and alias are required"

    def test_parsed_alias_immutable(self):
        """Test ParsedAlias cannot be modified after construction."""
        parsed = parse_alias("alice$example.com", "btc")
        with pytest.raises(Exception):
            parsed.domain = "evil.example"


class TestPercentEncode:
    """Test suite for percent_encode function."""

    def test_unreserved_pass_through(self):
        """Test alphanumerics and -_.~ are not escaped."""
        assert percent_encode("Az09-_.~") == "Az09-_.~"

    def test_reserved_escaped_uppercase(self):
        """Test reserved characters become uppercase %XX."""
        assert percent_encode("btc:alice$example.com") == "btc%3Aalice%24example.com"
        assert percent_encode("a+b c/d") == "a%2Bb%20c%2Fd"

    def test_utf8_bytes(self):
        """Test non-ASCII characters are escaped byte by byte."""
        assert percent_encode("é") == "%C3%A9"
