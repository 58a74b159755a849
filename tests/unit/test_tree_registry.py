"""
Тесты для Tree (реестр коллекций)

Проверяет:
1. Пустой реестр
2. Create-and-seed протокол (token 0 → creator, token 1 → Tree)
3. Детерминированные адреса (predict до и после create_echo)
4. Перечисление в порядке создания
5. UUID identifiers
6. Base URI (admin-only, ретроактивность)
7. Атомарность при ошибках
"""

import pytest

from echoes import EchoesSettings, Host, Identifier, parse_ether
from echoes.core.domain import EventKind
from echoes.core.errors import (
    DuplicateIdentifier,
    InvalidBaseURI,
    InvalidIndex,
    InvalidPrice,
    InvalidSupply,
    Unauthorized,
)


SALE_PRICE = parse_ether("0.01")
BASE_URI = "https://example.com/"


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def host():
    return Host(settings=EchoesSettings(default_base_uri=""))


@pytest.fixture
def tree_owner():
    return Host.account("tree-owner")


@pytest.fixture
def authors():
    return [Host.account("author-a"), Host.account("author-b"), Host.account("author-c")]


@pytest.fixture
def tree(host, tree_owner):
    return host.deploy_tree(tree_owner, base_uri=BASE_URI)


# =============================================================================
# CREATION
# =============================================================================


class TestCreateEcho:
    """Create-and-seed протокол"""

    def test_initial_tree_has_no_echo(self, tree):
        assert tree.echo_count() == 0
        assert list(tree.echoes()) == []

    def test_creating_echo_mints_to_author_and_tree(self, host, tree, authors):
        author = authors[0]
        address = tree.create_echo(author, Identifier.from_text("Echo Title"), SALE_PRICE, 10)

        assert tree.echo_count() == 1
        assert tree.echo_at(0) == address

        echo = host.echo_at_address(address)
        assert echo.owner == author
        assert echo.total_supply == 2
        assert echo.balance_of(author) == 1
        assert echo.balance_of(tree.address) == 1
        assert echo.owner_of(0) == author
        assert echo.owner_of(1) == tree.address
        assert echo.token_uri(0) == f"{BASE_URI}{address.lower()}/0"
        assert echo.token_uri(1) == f"{BASE_URI}{address.lower()}/1"

    def test_create_echo_emits_event(self, host, tree, authors):
        identifier = Identifier.from_text("Echo Title")
        address = tree.create_echo(authors[0], identifier, SALE_PRICE, 10)

        created = host.events(kind=EventKind.ECHO_CREATED)
        assert len(created) == 1
        assert created[0].identifier == identifier.hex
        assert created[0].echo_address == address
        assert created[0].owner == authors[0]
        assert created[0].emitter == tree.address

    def test_create_echo_emits_two_seed_transfers(self, host, tree, authors):
        address = tree.create_echo(authors[0], Identifier.from_text("Echo Title"), 0, 10)

        transfers = host.events(kind=EventKind.TRANSFER, emitter=address)
        assert [(t.from_address, t.to_address, t.token_id) for t in transfers] == [
            (None, authors[0], 0),
            (None, tree.address, 1),
        ]

    def test_create_echo_accepts_raw_bytes(self, host, tree, authors):
        raw = Identifier.from_text("Raw").raw
        address = tree.create_echo(authors[0], raw, SALE_PRICE, 10)
        assert tree.echo(Identifier.from_text("Raw")).address == address

    def test_caller_address_is_normalized(self, host, tree, authors):
        address = tree.create_echo(authors[0].lower(), Identifier.from_text("Lower"), 0, 10)
        assert host.echo_at_address(address).owner == authors[0]


# =============================================================================
# DETERMINISTIC ADDRESSES
# =============================================================================


class TestPredictEchoAddress:
    """Предсказанный адрес стабилен до и после публикации"""

    def test_echo_addresses_are_deterministic(self, tree, authors):
        identifier = Identifier.from_text("Echo Title")

        before = tree.predict_echo_address(identifier)
        tree.create_echo(authors[0], identifier, SALE_PRICE, 10)
        after = tree.predict_echo_address(identifier)

        assert before.echo_address == tree.echo_at(0)
        assert before.already_published is False
        assert after.echo_address == tree.echo_at(0)
        assert after.already_published is True

    def test_prediction_unpacks_as_tuple(self, tree):
        address, published = tree.predict_echo_address(Identifier.from_text("Echo Title"))
        assert address.startswith("0x")
        assert published is False

    def test_predict_has_no_side_effects(self, host, tree):
        for _ in range(3):
            tree.predict_echo_address(Identifier.from_text("Echo Title"))
        assert tree.echo_count() == 0
        assert host.events(kind=EventKind.ECHO_CREATED) == []

    def test_different_trees_predict_different_addresses(self, host, tree, tree_owner):
        other = host.deploy_tree(tree_owner, base_uri=BASE_URI)
        identifier = Identifier.from_text("Echo Title")

        assert other.address != tree.address
        assert (
            other.predict_echo_address(identifier).echo_address
            != tree.predict_echo_address(identifier).echo_address
        )

    def test_identifiers_can_be_uuids(self, host, tree, authors):
        ids = [
            "11111111-1111-1111-8888-111111111111",
            "22222222-2222-2222-8888-222222222222",
            "33333333-3333-3333-8888-333333333333",
        ]
        predicted = [
            tree.predict_echo_address(Identifier.from_uuid(id_)).echo_address for id_ in ids
        ]

        for author, id_ in zip(authors, ids):
            tree.create_echo(author, Identifier.from_uuid(id_), SALE_PRICE, 10)

        for author, address in zip(authors, predicted):
            assert host.echo_at_address(address).owner == author


# =============================================================================
# ENUMERATION
# =============================================================================


class TestEnumeration:
    def test_tree_enumerates_echoes_in_creation_order(self, host, tree, authors):
        titles = ["Echo Title Aye", "Echo Title Bee", "Echo Title Cee"]
        for author, title in zip(authors, titles):
            tree.create_echo(author, Identifier.from_text(title), SALE_PRICE, 10)

        assert tree.echo_count() == 3
        owners = [host.echo_at_address(tree.echo_at(i)).owner for i in range(3)]
        assert owners == authors
        assert [e.identifier.as_text() for e in tree.echoes()] == titles

    def test_echo_at_out_of_range(self, tree, authors):
        tree.create_echo(authors[0], Identifier.from_text("Only"), 0, 10)

        with pytest.raises(InvalidIndex):
            tree.echo_at(1)
        with pytest.raises(InvalidIndex):
            tree.echo_at(-1)

    def test_echo_at_on_empty_tree(self, tree):
        with pytest.raises(InvalidIndex) as exc_info:
            tree.echo_at(0)
        assert exc_info.value.length == 0

    def test_lookup_by_identifier(self, tree, authors):
        tree.create_echo(authors[0], Identifier.from_text("Known"), 0, 10)

        assert tree.echo(Identifier.from_text("Known")) is not None
        assert tree.echo(Identifier.from_text("Unknown")) is None
        assert tree.is_published(Identifier.from_text("Known"))


# =============================================================================
# FAILURES ARE ATOMIC
# =============================================================================


class TestCreateEchoFailures:
    def test_duplicate_identifier_rejected(self, host, tree, authors):
        identifier = Identifier.from_text("Echo Title")
        first = tree.create_echo(authors[0], identifier, SALE_PRICE, 10)
        events_before = host.events()

        with pytest.raises(DuplicateIdentifier) as exc_info:
            tree.create_echo(authors[1], identifier, 0, 5)

        assert exc_info.value.existing_address == first
        assert tree.echo_count() == 1
        assert host.echo_at_address(first).owner == authors[0]
        assert host.events() == events_before

    @pytest.mark.parametrize("max_supply", [0, 1])
    def test_max_supply_below_seed_rejected(self, host, tree, authors, max_supply):
        identifier = Identifier.from_text("Tiny")

        with pytest.raises(InvalidSupply):
            tree.create_echo(authors[0], identifier, SALE_PRICE, max_supply)

        assert tree.echo_count() == 0
        assert tree.predict_echo_address(identifier).already_published is False
        assert not host.is_deployed(tree.predict_echo_address(identifier).echo_address)
        assert host.events(kind=EventKind.TRANSFER) == []

    def test_negative_price_rejected(self, tree, authors):
        with pytest.raises(InvalidPrice):
            tree.create_echo(authors[0], Identifier.from_text("Negative"), -1, 10)
        assert tree.echo_count() == 0

    def test_failed_creation_can_be_retried(self, tree, authors):
        identifier = Identifier.from_text("Retry")
        with pytest.raises(InvalidSupply):
            tree.create_echo(authors[0], identifier, 0, 1)

        address = tree.create_echo(authors[0], identifier, 0, 2)
        assert address == tree.predict_echo_address(identifier).echo_address

    def test_minimum_supply_of_two_is_immediately_exhausted(self, host, tree, authors):
        address = tree.create_echo(authors[0], Identifier.from_text("Pair"), 0, 2)
        echo = host.echo_at_address(address)
        assert echo.total_supply == echo.max_supply == 2


# =============================================================================
# BASE URI
# =============================================================================


class TestBaseURI:
    def test_set_base_uri_is_retroactive(self, host, tree, tree_owner, authors):
        address = tree.create_echo(authors[0], Identifier.from_text("Echo Title"), 0, 10)
        echo = host.echo_at_address(address)

        tree.set_base_uri(tree_owner, "ipfs://bucket/")

        assert tree.base_uri == "ipfs://bucket/"
        assert echo.token_uri(0) == f"ipfs://bucket/{address.lower()}/0"

    def test_set_base_uri_requires_admin(self, host, tree, authors):
        with pytest.raises(Unauthorized):
            tree.set_base_uri(authors[0], "https://evil.example/")
        assert tree.base_uri == BASE_URI

    def test_base_uri_event_logged(self, host, tree, tree_owner):
        tree.set_base_uri(tree_owner, "https://cdn.example/")
        updates = host.events(kind=EventKind.BASE_URI_UPDATED)
        assert [u.base_uri for u in updates] == [BASE_URI, "https://cdn.example/"]

    def test_base_uri_trailing_slash_not_added(self, host, tree, tree_owner, authors):
        tree.set_base_uri(tree_owner, "https://example.com")
        address = tree.create_echo(authors[0], Identifier.from_text("Echo Title"), 0, 10)
        assert host.echo_at_address(address).token_uri(1) == f"https://example.com{address.lower()}/1"

    @pytest.mark.parametrize("bad_uri", [None, 123, b"https://bytes.example/"])
    def test_rejected_base_uri_leaves_state_unchanged(self, host, tree, tree_owner, bad_uri):
        events_before = host.events()

        with pytest.raises(InvalidBaseURI):
            tree.set_base_uri(tree_owner, bad_uri)

        assert tree.base_uri == BASE_URI
        assert host.events() == events_before
