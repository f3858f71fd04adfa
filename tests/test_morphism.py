"""Tests for morphisms and their reuse by name."""

import pytest

from cayley_sdk import (
    AnyPredicate,
    AnyTag,
    FromQuery,
    Morphism,
    Node,
    Predicate,
    ReusableCannotBeSavedError,
    Tag,
    Tags,
    Vertex,
)


def friend_of_friend():
    return Morphism.start("friendOfFriend").out(Predicate("follows")).out(Predicate("follows"))


class TestMorphismBuild:
    """Tests for building morphism bodies."""

    def test_root(self):
        assert Morphism.start("m").compile() == "g.M()"

    def test_body(self):
        m = Morphism.start("m").out(Predicate("foo")).out(Predicate("bar"))
        assert m.compile() == 'g.M().Out("foo").Out("bar")'

    def test_body_with_tags(self):
        m = Morphism.start("m").out(Predicate("foo"), Tags(["tag1", "tag2"])).out(Predicate("bar"), Tag("tag0"))
        assert m.compile() == 'g.M().Out("foo", "tag1","tag2").Out("bar", "tag0")'

    def test_starts_unsaved(self):
        m = Morphism.start("m")
        assert m.name == "m"
        assert not m.is_saved()

    @pytest.mark.parametrize("name", ["", "1abc", "has space", "a-b", 'x"y'])
    def test_rejects_non_identifier_names(self, name):
        with pytest.raises(ValueError):
            Morphism.start(name)

    @pytest.mark.parametrize("name", ["g", "graph", "var", "function", "undefined"])
    def test_rejects_reserved_names(self, name):
        with pytest.raises(ValueError, match="reserved"):
            Morphism.start(name)

    def test_has_no_terminal_operations(self):
        assert not hasattr(Morphism.start("m"), "all")


class TestSaveStatement:
    """Tests for the assignment statement."""

    def test_save_statement(self):
        assert friend_of_friend().save_statement() == \
            'friendOfFriend = g.M().Out("follows").Out("follows")'

    def test_save_statement_as_keeps_own_name(self):
        m = friend_of_friend()
        assert m.save_statement_as("fof") == 'fof = g.M().Out("follows").Out("follows")'
        assert m.name == "friendOfFriend"

    def test_broken_body_cannot_be_saved(self):
        m = Morphism.start("broken").save(AnyPredicate(), AnyTag())
        with pytest.raises(ReusableCannotBeSavedError, match="broken"):
            m.save_statement()
        with pytest.raises(ReusableCannotBeSavedError):
            m.save_statement_as("other")

    @pytest.mark.parametrize("name", ["g", "graph", "var", "function"])
    def test_save_statement_as_rejects_reserved_names(self, name):
        with pytest.raises(ValueError):
            friend_of_friend().save_statement_as(name)

    def test_save_statement_does_not_mark_saved(self):
        m = friend_of_friend()
        m.save_statement()
        assert not m.is_saved()

    def test_mark_saved_is_idempotent(self):
        m = friend_of_friend()
        m.mark_saved()
        m.mark_saved()
        assert m.is_saved()


class TestFollow:
    """Tests for referencing morphisms from other paths."""

    def test_follow_references_by_name(self):
        m = friend_of_friend()
        m.mark_saved()
        path = Vertex.start(Node("C")).follow(m).has(Predicate("status"), Node("cool_person"))
        assert path.compile() == 'g.V("C").Follow(friendOfFriend).Has("status", "cool_person")'
        assert "Out" not in path.compile()

    def test_follow_r(self):
        m = friend_of_friend()
        m.mark_saved()
        path = Vertex.start().has(Predicate("status"), Node("cool_person")).follow_r(m)
        assert path.compile() == 'g.V().Has("status", "cool_person").FollowR(friendOfFriend)'

    def test_followed_is_tracked(self):
        m = friend_of_friend()
        path = Vertex.start().follow(m).follow_r(m)
        assert path.followed() == [m]

    def test_followed_includes_joined_paths(self):
        m = friend_of_friend()
        path = Vertex.start(Node("C")).and_(Vertex.start().follow(m))
        assert path.followed() == [m]

    def test_follow_unsaved_warns(self, caplog):
        with caplog.at_level("WARNING"):
            Vertex.start().follow(friend_of_friend())
        assert "friendOfFriend" in caplog.text

    def test_follow_saved_does_not_warn(self, caplog):
        m = friend_of_friend()
        m.mark_saved()
        with caplog.at_level("WARNING"):
            Vertex.start().follow(m)
        assert caplog.text == ""

    def test_morphism_follows_morphism(self):
        inner = friend_of_friend()
        inner.mark_saved()
        outer = Morphism.start("outer").follow(inner).out(Predicate("status"))
        assert outer.save_statement() == 'outer = g.M().Follow(friendOfFriend).Out("status")'

    def test_followed_includes_nested_morphisms(self):
        """Following an outer morphism also tracks what it follows."""
        inner = friend_of_friend()
        outer = Morphism.start("outer").follow(inner).out(Predicate("status"))
        path = Vertex.start(Node("C")).follow(outer)
        assert path.followed() == [outer, inner]

    def test_followed_includes_nested_query_predicates(self):
        m = friend_of_friend()
        path = Vertex.start().out(FromQuery(Vertex.start().follow(m)))
        assert path.followed() == [m]

    @pytest.mark.parametrize("method", ["follow", "follow_r"])
    def test_follow_rejects_plain_paths(self, method):
        """Only morphisms can be followed by name."""
        path = Vertex.start()
        with pytest.raises(TypeError, match="morphism"):
            getattr(path, method)(Vertex.start(Node("C")))
        assert path.segments == ("g.V()",)


class TestChainedTypes:
    """Tests for the concrete type returned by chained calls."""

    def test_vertex_chain_keeps_terminal_operations(self):
        path = Vertex.start().out(Predicate("follows")).has(Predicate("status")).tag(Tag("t"))
        assert isinstance(path, Vertex)
        assert path.all().compile() == 'g.V().Out("follows").Has("status").Tag("t").All()'

    def test_morphism_chain_stays_a_morphism(self):
        m = Morphism.start("m").out(Predicate("follows")).follow_r(friend_of_friend())
        assert isinstance(m, Morphism)
        assert m.save_statement() == 'm = g.M().Out("follows").FollowR(friendOfFriend)'
