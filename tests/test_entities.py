"""
Tests for the restock entities and their state machine.
"""
import pytest

from conftest import BASE_TIME
from core.domain import EmailAddress, ValidationException
from restock.domain import (
    DuplicateProductError,
    EmptySessionError,
    InvalidStateError,
    ItemNotFoundError,
    Product,
    RestockItem,
    RestockSession,
    SessionClosedError,
    SessionStatus,
    Supplier,
    ValidationError,
)


def make_item(product_id="p-1", product_name="Flour", quantity=5, supplier_id="s-1",
              supplier_name="Acme", supplier_email="a@acme.com", notes=None) -> RestockItem:
    return RestockItem(
        product_id=product_id,
        product_name=product_name,
        quantity=quantity,
        supplier_id=supplier_id,
        supplier_name=supplier_name,
        supplier_email=supplier_email,
        notes=notes,
    )


def draft_session(*items: RestockItem) -> RestockSession:
    session = RestockSession.create("session-1", "user-1", "Weekly", created_at=BASE_TIME)
    for item in items:
        session = session.add_item(item)
    return session


def sent_session() -> RestockSession:
    return draft_session(make_item()).generate_emails().mark_completed()


def test_status_transitions_only_move_forward():
    """Each status may only advance one step."""
    assert SessionStatus.DRAFT.can_transition_to(SessionStatus.EMAIL_GENERATED)
    assert SessionStatus.EMAIL_GENERATED.can_transition_to(SessionStatus.SENT)
    assert not SessionStatus.DRAFT.can_transition_to(SessionStatus.SENT)
    assert not SessionStatus.SENT.can_transition_to(SessionStatus.DRAFT)
    assert SessionStatus.SENT.next_status is None


def test_create_uses_dated_default_name():
    session = RestockSession.create("session-1", "user-1", "   ", created_at=BASE_TIME)

    assert session.name == "Restock Session 2024-03-15"
    assert session.status is SessionStatus.DRAFT
    assert session.items == ()
    assert session.updated_at == BASE_TIME


def test_session_requires_ids():
    with pytest.raises(ValidationError, match="Session ID is required"):
        RestockSession.create("", "user-1")
    with pytest.raises(ValidationError, match="User ID is required"):
        RestockSession.create("session-1", " ")


def test_add_item_returns_new_session():
    """Adding never mutates the original session."""
    original = draft_session()
    updated = original.add_item(make_item())

    assert original.items == ()
    assert len(updated.items) == 1
    assert updated.has_product("p-1")
    assert updated == original  # same identity


def test_add_item_rejects_duplicate_product():
    session = draft_session(make_item())

    with pytest.raises(DuplicateProductError) as exc_info:
        session.add_item(make_item(quantity=3))

    assert str(exc_info.value) == 'Product "Flour" is already in this session'


def test_restock_item_validates_fields():
    with pytest.raises(ValidationError, match="Quantity must be greater than zero"):
        make_item(quantity=0)
    with pytest.raises(ValidationError, match="Quantity must be a whole number"):
        make_item(quantity=2.5)
    with pytest.raises(ValidationError, match="Product name cannot be empty"):
        make_item(product_name="  ")
    with pytest.raises(ValidationError, match="Supplier email must be valid"):
        make_item(supplier_email="not-an-email")


def test_restock_item_normalizes_snapshot():
    item = make_item(product_name="  Flour ", supplier_email=" A@Acme.COM ", notes="   ")

    assert item.product_name == "Flour"
    assert item.supplier_email == "a@acme.com"
    assert item.notes is None


def test_remove_missing_product_is_a_no_op():
    session = draft_session(make_item())

    assert session.remove_item("missing") is session


def test_update_item_changes_only_target():
    session = draft_session(make_item(), make_item(product_id="p-2", product_name="Sugar"))

    updated = session.update_item("p-2", quantity=7, notes="brown")

    assert updated.find_item("p-1").quantity == 5
    assert updated.find_item("p-2").quantity == 7
    assert updated.find_item("p-2").notes == "brown"


def test_update_item_errors():
    session = draft_session(make_item())

    with pytest.raises(ItemNotFoundError, match="Product with ID p-9 is not in this session"):
        session.update_item("p-9", quantity=2)
    with pytest.raises(ValidationError):
        session.update_item("p-1", supplier_id="s-2")
    with pytest.raises(ValidationError, match="Quantity must be greater than zero"):
        session.update_item("p-1", quantity=-1)


def test_generate_emails_requires_items():
    with pytest.raises(EmptySessionError, match="Cannot generate emails for a session with no items"):
        draft_session().generate_emails()


def test_mark_completed_requires_generated_emails():
    with pytest.raises(InvalidStateError, match="Can only send emails that have been generated"):
        draft_session(make_item()).mark_completed()


@pytest.mark.parametrize("mutate", [
    lambda s: s.add_item(make_item(product_id="p-2", product_name="Sugar")),
    lambda s: s.remove_item("p-1"),
    lambda s: s.update_item("p-1", quantity=2),
    lambda s: s.update_item("p-1", quantity=0),
    lambda s: s.set_name("Renamed"),
    lambda s: s.set_name(""),
])
def test_sent_session_rejects_mutations(mutate):
    """Once sent, every mutation fails and the session is left unchanged."""
    session = sent_session()
    before = session.to_dict()

    with pytest.raises(SessionClosedError):
        mutate(session)

    assert session.to_dict() == before


def test_sent_session_rejects_transitions():
    session = sent_session()

    with pytest.raises(InvalidStateError):
        session.generate_emails()
    with pytest.raises(InvalidStateError):
        session.mark_completed()


def test_set_name_allowed_until_sent():
    generated = draft_session(make_item()).generate_emails()

    renamed = generated.set_name("  Friday order ")

    assert renamed.name == "Friday order"
    with pytest.raises(ValidationError, match="Session name cannot be empty"):
        generated.set_name("")


def test_unique_suppliers_keep_first_encounter_order():
    session = draft_session(
        make_item(product_id="p-1", supplier_id="s-2", supplier_name="Beta", supplier_email="b@beta.com"),
        make_item(product_id="p-2", product_name="Sugar"),
        make_item(product_id="p-3", product_name="Salt", supplier_id="s-2",
                  supplier_name="Beta", supplier_email="b@beta.com"),
    )

    assert [s["id"] for s in session.unique_suppliers()] == ["s-2", "s-1"]
    assert session.unique_supplier_count() == 2
    assert len(session.items_by_supplier("s-2")) == 2
    assert session.total_quantity() == 15


def test_session_dict_round_trip_preserves_state():
    session = draft_session(make_item(notes="organic")).generate_emails()

    restored = RestockSession.from_dict(session.to_dict())

    assert restored.status is SessionStatus.EMAIL_GENERATED
    assert restored.items == session.items
    assert restored.created_at == session.created_at
    assert restored.updated_at == session.updated_at


def test_session_name_length_limit():
    with pytest.raises(ValidationError):
        RestockSession.create("session-1", "user-1", "x" * 256)


def test_product_and_supplier_records():
    product = Product(id="p-1", user_id="user-1", name=" Flour ")
    supplier = Supplier(id="s-1", user_id="user-1", name="Acme", email=" Orders@Acme.com ")

    assert product.name == "Flour"
    assert product.default_quantity == 1
    assert product.update_default_supplier("s-1").has_default_supplier()
    assert product.matches("flo")
    assert supplier.email == "orders@acme.com"
    assert supplier.matches("ORDERS")
    assert not supplier.has_phone()
    with pytest.raises(ValidationError):
        Product(id="p-2", user_id="user-1", name="Sugar", default_quantity=0)
    with pytest.raises(ValidationError, match="Supplier email must be valid"):
        supplier.update_email("broken")


def test_email_address_value_object():
    assert EmailAddress(" Orders@Acme.com ").value == "orders@acme.com"
    with pytest.raises(ValidationException, match="Invalid email address"):
        EmailAddress("broken")
