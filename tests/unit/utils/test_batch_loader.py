"""Tests unitarios del cargador por lotes y del group_by ordenado."""

from unittest.mock import AsyncMock

import pytest

from order_catalog.utils.batch_loader import chunked, load_in_batches
from order_catalog.utils.grouping import group_by


class TestChunked:
    """Tests para la función chunked."""

    def test_splits_in_consecutive_chunks(self):
        """Debe partir en bloques consecutivos con el último más corto."""
        assert list(chunked([1, 2, 3, 4, 5], 2)) == [[1, 2], [3, 4], [5]]

    def test_empty_keys(self):
        """Debe no producir bloques para una lista vacía."""
        assert list(chunked([], 3)) == []

    @pytest.mark.parametrize("size", [0, -1])
    def test_invalid_size(self, size):
        """Debe rechazar tamaños de lote menores a 1."""
        with pytest.raises(ValueError):
            list(chunked([1], size))


class TestLoadInBatches:
    """Tests para load_in_batches."""

    @pytest.mark.asyncio
    async def test_one_fetch_per_batch(self):
        """Debe llamar a fetch una vez por lote de claves."""
        fetch = AsyncMock(side_effect=lambda keys: [(key, f"child-{key}") for key in keys])

        result = await load_in_batches([1, 2, 3], batch_size=2, fetch=fetch, key_of=lambda child: child[0])

        assert fetch.await_count == 2
        assert fetch.await_args_list[0].args == ([1, 2],)
        assert fetch.await_args_list[1].args == ([3],)
        assert result == {1: [(1, "child-1")], 2: [(2, "child-2")], 3: [(3, "child-3")]}

    @pytest.mark.asyncio
    async def test_deduplicates_keys(self):
        """Debe ignorar claves repetidas conservando el orden."""
        fetch = AsyncMock(return_value=[])

        result = await load_in_batches([2, 1, 2], batch_size=10, fetch=fetch, key_of=lambda child: child)

        fetch.assert_awaited_once_with([2, 1])
        assert list(result) == [2, 1]

    @pytest.mark.asyncio
    async def test_keys_without_children(self):
        """Debe devolver listas vacías para claves sin hijos."""
        fetch = AsyncMock(return_value=[(1, "a"), (1, "b")])

        result = await load_in_batches([1, 2], batch_size=5, fetch=fetch, key_of=lambda child: child[0])

        assert result == {1: [(1, "a"), (1, "b")], 2: []}

    @pytest.mark.asyncio
    async def test_empty_keys_skip_fetch(self):
        """Debe no consultar si no hay claves."""
        fetch = AsyncMock()

        assert await load_in_batches([], batch_size=5, fetch=fetch, key_of=lambda child: child) == {}
        fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_batch_size(self):
        """Debe rechazar un tamaño de lote inválido."""
        with pytest.raises(ValueError):
            await load_in_batches([1], batch_size=0, fetch=AsyncMock(), key_of=lambda child: child)


class TestGroupBy:
    """Tests para group_by."""

    def test_preserves_first_seen_and_arrival_order(self):
        """Debe conservar el orden de aparición de grupos y valores."""
        rows = [("b", 1), ("a", 2), ("b", 3)]

        assert group_by(rows, key=lambda row: row[0], value=lambda row: row[1]) == {"b": [1, 3], "a": [2]}
        assert list(group_by(rows, key=lambda row: row[0])) == ["b", "a"]

    def test_identity_value_by_default(self):
        """Debe guardar la fila completa si no se indica value."""
        assert group_by([1, 2, 3], key=lambda n: n % 2) == {1: [1, 3], 0: [2]}
