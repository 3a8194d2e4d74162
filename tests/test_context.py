"""
Tests for the key-value context.
"""

from staticweaver.context import Context


class TestContext:
    """Test Context container."""

    def test_new_context_is_empty(self):
        """Test new context is empty."""
        context = Context()
        assert context.is_empty()
        assert len(context) == 0

    def test_set_and_get(self):
        """Test setting and getting values."""
        context = Context()
        context.set("key", "value")
        assert context.get("key") == "value"
        assert context.get("missing") is None
        assert "key" in context

    def test_set_overwrites(self):
        """Test setting an existing key overwrites it."""
        context = Context({"key": "value"})
        context.set("key", "new_value")
        assert context.get("key") == "new_value"
        assert len(context) == 1

    def test_remove(self):
        """Test removing keys."""
        context = Context({"key": "value"})
        assert context.remove("key") == "value"
        assert context.get("key") is None
        assert context.remove("key") is None

    def test_from_pairs(self):
        """Test building from (key, value) pairs."""
        context = Context.from_pairs([("key1", "value1"), ("key2", "value2")])
        assert context.get("key1") == "value1"
        assert context.get("key2") == "value2"

    def test_extend(self):
        """Test extending from pairs and mappings."""
        context = Context()
        context.extend([("key1", "value1"), ("key2", "value2")])
        context.extend({"key3": "value3"})
        assert len(context) == 3
        assert context.get("key3") == "value3"

    def test_iter(self):
        """Test iterating over pairs."""
        context = Context({"key1": "value1", "key2": "value2"})
        assert sorted(context.iter()) == [("key1", "value1"), ("key2", "value2")]
        assert sorted(context) == [("key1", "value1"), ("key2", "value2")]

    def test_clear(self):
        """Test clearing the context."""
        context = Context({"key1": "value1", "key2": "value2"})
        assert len(context) == 2
        context.clear()
        assert context.is_empty()

    def test_copy_is_independent(self):
        """Test copies do not share elements."""
        original = Context({"key": "value"})
        copied = original.copy()
        copied.set("key", "changed")
        assert original.get("key") == "value"
        assert original != copied

    def test_equality(self):
        """Test equality by elements."""
        assert Context({"a": "1", "b": "2"}) == Context({"b": "2", "a": "1"})


class TestContextHash:
    """Test Context content hash."""

    def test_equal_contexts_hash_equal(self):
        """Test equal contexts hash alike."""
        context1 = Context({"key1": "value1"})
        context2 = Context({"key1": "value1"})
        assert context1.hash() == context2.hash()

    def test_hash_changes_with_content(self):
        """Test adding a pair changes the hash."""
        context1 = Context({"key1": "value1"})
        context2 = Context({"key1": "value1"})
        context2.set("key2", "value2")
        assert context1.hash() != context2.hash()

    def test_hash_is_order_independent(self):
        """Test insertion order does not affect the hash."""
        forward = Context.from_pairs([("a", "1"), ("b", "2"), ("c", "3")])
        backward = Context.from_pairs([("c", "3"), ("b", "2"), ("a", "1")])
        assert forward.hash() == backward.hash()

    def test_hash_separates_key_and_value(self):
        """Test key/value boundary is part of the hash."""
        assert Context({"ab": "c"}).hash() != Context({"a": "bc"}).hash()

    def test_hash_distinguishes_swapped_values(self):
        """Test swapping values between keys changes the hash."""
        assert Context({"a": "1", "b": "2"}).hash() != Context({"a": "2", "b": "1"}).hash()

    def test_empty_hash(self):
        """Test empty context hashes to zero."""
        assert Context().hash() == 0

    def test_hash_fits_in_64_bits(self):
        """Test hash is an unsigned 64-bit value."""
        context = Context({f"key{i}": f"value{i}" for i in range(100)})
        assert 0 <= context.hash() < 2 ** 64

    def test_hash_is_stable(self):
        """Test hash does not depend on the process."""
        context = Context({"name": "Alice"})
        assert context.hash() == context.hash()
        assert Context({"name": "Alice"}).hash() == context.hash()
