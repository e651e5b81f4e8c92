"""Tests for module translators."""

import pytest
from aioresponses import aioresponses

from modlicense.exceptions import ConfigurationError
from modlicense.models import Module
from modlicense.translators import (
    GolangTranslator,
    GopkgTranslator,
    MapTranslator,
    ResolverTranslator,
    default_translators,
    translate,
)


def _module(path: str) -> Module:
    return Module(path=path, version="v1.2.3", hash="h1")


class TestMapTranslator:
    """Test suite for MapTranslator."""

    @pytest.mark.asyncio
    async def test_exact_match(self):
        translator = MapTranslator({"example.com/lib": "github.com/example/lib"})

        result = await translator.translate(_module("example.com/lib"))

        assert result.path == "github.com/example/lib"
        assert result.version == "v1.2.3"
        assert result.hash == "h1"

    @pytest.mark.asyncio
    async def test_no_match(self):
        translator = MapTranslator({"example.com/lib": "github.com/example/lib"})
        assert await translator.translate(_module("example.com/other")) is None

    @pytest.mark.asyncio
    async def test_pattern_with_groups(self):
        translator = MapTranslator({"/^example\\.com/([^/]+)$/": "github.com/example/$1"})

        result = await translator.translate(_module("example.com/tool"))

        assert result.path == "github.com/example/tool"

    @pytest.mark.asyncio
    async def test_exact_takes_precedence(self):
        translator = MapTranslator(
            {
                "/^example\\.com/(.*)$/": "github.com/pattern/$1",
                "example.com/lib": "github.com/exact/lib",
            }
        )
        result = await translator.translate(_module("example.com/lib"))
        assert result.path == "github.com/exact/lib"

    @pytest.mark.asyncio
    async def test_backslash_in_replacement_is_literal(self):
        translator = MapTranslator({"/^example\\.com/(.*)$/": "example.org\\x/$1"})

        result = await translator.translate(_module("example.com/lib"))

        assert result.path == "example.org\\x/lib"

    def test_invalid_pattern(self):
        with pytest.raises(ConfigurationError, match="Invalid translate pattern"):
            MapTranslator({"/([/": "x"})

    def test_replacement_refers_to_missing_group(self):
        """Test that an out-of-range $N is rejected when the mapping is loaded."""
        with pytest.raises(ConfigurationError, match=r"1 group\(s\), \$2 requested"):
            MapTranslator({"/^example\\.com/(.*)$/": "github.com/example/$2"})

    def test_replacement_without_groups(self):
        with pytest.raises(ConfigurationError, match="Invalid translate replacement"):
            MapTranslator({"/^example\\.com/lib$/": "github.com/example/$1"})


class TestGolangTranslator:
    """Test suite for GolangTranslator."""

    @pytest.mark.asyncio
    async def test_x_repository(self):
        result = await GolangTranslator().translate(_module("golang.org/x/sys"))
        assert result.path == "github.com/golang/sys"

    @pytest.mark.asyncio
    async def test_x_subpackage(self):
        result = await GolangTranslator().translate(_module("golang.org/x/net/http2"))
        assert result.path == "github.com/golang/net/http2"

    @pytest.mark.asyncio
    async def test_other_path(self):
        assert await GolangTranslator().translate(_module("github.com/pkg/errors")) is None


class TestGopkgTranslator:
    """Test suite for GopkgTranslator."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("gopkg.in/yaml.v2", "github.com/go-yaml/yaml"),
            ("gopkg.in/check.v1", "github.com/go-check/check"),
            ("gopkg.in/src-d/go-git.v4", "github.com/src-d/go-git"),
            ("gopkg.in/mgo.v2/bson", "github.com/go-mgo/mgo"),
        ],
    )
    async def test_translations(self, path, expected):
        result = await GopkgTranslator().translate(_module(path))
        assert result.path == expected

    @pytest.mark.asyncio
    async def test_other_path(self):
        assert await GopkgTranslator().translate(_module("github.com/go-yaml/yaml")) is None


class TestTranslateChain:
    """Test applying the whole translator chain."""

    def test_default_order(self):
        translators = default_translators()

        assert [type(t) for t in translators] == [
            MapTranslator,
            ResolverTranslator,
            GolangTranslator,
            GopkgTranslator,
        ]

    @pytest.mark.asyncio
    async def test_translators_apply_cumulatively(self):
        """Test that each translator sees the previous output."""
        translators = default_translators({"example.com/sys": "golang.org/x/sys"})

        # No go-get responses are registered, so the resolver leaves it alone.
        with aioresponses():
            result = await translate(_module("example.com/sys"), translators)

        assert result.path == "github.com/golang/sys"
        for translator in translators:
            await translator.close()

    @pytest.mark.asyncio
    async def test_untouched_module_passes_through(self):
        module = _module("github.com/pkg/errors")
        translators = default_translators()

        assert await translate(module, translators) is module

    @pytest.mark.asyncio
    async def test_empty_chain(self):
        module = _module("gopkg.in/yaml.v2")
        assert await translate(module, []) is module
