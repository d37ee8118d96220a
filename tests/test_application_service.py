"""
Tests for RestockApplicationService wired with in-memory repositories.
"""
import asyncio

import pytest

from core.infrastructure import StatusCode
from restock.application import (
    AddItemCommand,
    AddProductCommand,
    CreateSessionCommand,
    DeleteSessionCommand,
    GenerateEmailsCommand,
    GetSessionQuery,
    GetUserSessionsQuery,
    MarkAsSentCommand,
    RemoveProductCommand,
    ReplaySessionCommand,
    UpdateItemCommand,
    UpdateSessionNameCommand,
)
from restock.domain import Product, Supplier
from restock.infrastructure import InMemorySessionRepository

USER = "user-1"


def run(coro):
    return asyncio.run(coro)


def create_session(app_service, name=None, user_id=USER) -> str:
    result = run(app_service.create_session(CreateSessionCommand(user_id=user_id, name=name)))
    assert result.success
    return result.data.id


def add_item(app_service, session_id, product_name="Flour", quantity=10, supplier_name="Acme",
             supplier_email="a@acme.com", notes=None, user_id=USER):
    return run(app_service.add_item(AddItemCommand(
        session_id=session_id,
        user_id=user_id,
        product_name=product_name,
        quantity=quantity,
        supplier_name=supplier_name,
        supplier_email=supplier_email,
        notes=notes,
    )))


def test_create_session(app_service):
    result = run(app_service.create_session(CreateSessionCommand(user_id=USER, name="Weekly order")))

    assert result.success
    assert result.code == StatusCode.CREATED
    assert result.data.id == "gen-1"
    assert result.data.name == "Weekly order"
    assert result.data.status == "draft"
    assert result.to_dict()["data"]["items"] == []


def test_full_lifecycle(app_service):
    """Create, fill, generate emails, and send a session."""
    session_id = create_session(app_service)
    assert add_item(app_service, session_id).success
    assert add_item(app_service, session_id, product_name="Milk", quantity=4, supplier_name="Dairy Co",
                    supplier_email="orders@dairy.co").success

    generated = run(app_service.generate_emails(GenerateEmailsCommand(
        session_id=session_id,
        user_id=USER,
        store_name="Corner Shop",
        sender_name="Sam",
    )))

    assert generated.success
    assert generated.data.session.status == "email_generated"
    assert [email.supplier_name for email in generated.data.emails] == ["Acme", "Dairy Co"]
    first = generated.data.emails[0]
    assert first.subject == "Restock Order from Corner Shop"
    assert "• 10x Flour" in first.body
    assert "Milk" not in first.body

    sent = run(app_service.mark_as_sent(MarkAsSentCommand(session_id=session_id, user_id=USER)))

    assert sent.success
    assert sent.data.status == "sent"


def test_add_item_persists_new_catalog_records(app_service, factory):
    session_id = create_session(app_service)
    add_item(app_service, session_id)

    products = run(factory.create_product_repository().find_by_user_id(USER))
    suppliers = run(factory.create_supplier_repository().find_by_user_id(USER))

    assert [p.name for p in products] == ["Flour"]
    assert [s.email for s in suppliers] == ["a@acme.com"]
    assert products[0].default_supplier_id == suppliers[0].id


def test_catalog_records_are_reused_across_sessions(app_service, factory):
    first_id = create_session(app_service)
    second_id = create_session(app_service)

    first = add_item(app_service, first_id)
    second = add_item(app_service, second_id, quantity=3, supplier_email="A@Acme.com")

    assert first.data.items[0].product_id == second.data.items[0].product_id
    assert first.data.items[0].supplier_id == second.data.items[0].supplier_id
    assert len(run(factory.create_product_repository().find_by_user_id(USER))) == 1


def test_duplicate_product_returns_failure(app_service):
    session_id = create_session(app_service)
    add_item(app_service, session_id)

    result = add_item(app_service, session_id)

    assert not result.success
    assert result.code == StatusCode.DUPLICATE_ENTITY
    assert result.error == 'Product "Flour" is already in this session'


def test_validation_failure_is_not_persisted(app_service):
    session_id = create_session(app_service)

    result = add_item(app_service, session_id, quantity=0)

    assert not result.success
    assert result.code == StatusCode.VALIDATION_ERROR
    assert result.error == "Quantity must be greater than zero"
    stored = run(app_service.get_session(GetSessionQuery(session_id=session_id, user_id=USER)))
    assert stored.data.items == []


def test_missing_session(app_service):
    result = run(app_service.get_session(GetSessionQuery(session_id="nope", user_id=USER)))

    assert not result.success
    assert result.code == StatusCode.SESSION_NOT_FOUND
    assert result.error == "Session with ID nope not found"


def test_session_id_is_required(app_service):
    result = run(app_service.mark_as_sent(MarkAsSentCommand(session_id="", user_id=USER)))

    assert result.code == StatusCode.VALIDATION_ERROR
    assert result.error == "Session ID is required"


def test_sessions_of_other_users_are_forbidden(app_service):
    session_id = create_session(app_service)

    rename = run(app_service.update_session_name(
        UpdateSessionNameCommand(user_id="user-2", name="Mine now", session_id=session_id)
    ))
    added = add_item(app_service, session_id, user_id="user-2")

    assert rename.code == StatusCode.FORBIDDEN
    assert rename.error == "You can only rename your own sessions"
    assert added.code == StatusCode.FORBIDDEN


def test_update_session_name(app_service):
    session_id = create_session(app_service)

    renamed = run(app_service.update_session_name(
        UpdateSessionNameCommand(user_id=USER, name="  Friday  ", session_id=session_id)
    ))
    created = run(app_service.update_session_name(UpdateSessionNameCommand(user_id=USER, name="Monday")))
    empty = run(app_service.update_session_name(
        UpdateSessionNameCommand(user_id=USER, name=" ", session_id=session_id)
    ))

    assert renamed.data.name == "Friday"
    assert created.success
    assert created.data.id != session_id
    assert created.data.name == "Monday"
    assert empty.error == "Session name cannot be empty"


def test_update_and_remove_items(app_service):
    session_id = create_session(app_service)
    product_id = add_item(app_service, session_id).data.items[0].product_id

    updated = run(app_service.update_item(UpdateItemCommand(
        session_id=session_id, user_id=USER, product_id=product_id, quantity=25, notes="urgent"
    )))
    removed = run(app_service.remove_product(RemoveProductCommand(
        session_id=session_id, user_id=USER, product_id=product_id
    )))

    assert updated.data.items[0].quantity == 25
    assert updated.data.items[0].notes == "urgent"
    assert removed.data.items == []


def test_add_product_by_id(app_service, factory):
    product = Product(id="p-1", user_id=USER, name="Sugar")
    supplier = Supplier(id="s-1", user_id=USER, name="Sweet Inc", email="sales@sweet.inc")
    run(factory.create_product_repository().save(product))
    run(factory.create_supplier_repository().save(supplier))
    session_id = create_session(app_service)

    added = run(app_service.add_product(AddProductCommand(
        session_id=session_id, user_id=USER, product_id="p-1", supplier_id="s-1", quantity=6
    )))
    missing = run(app_service.add_product(AddProductCommand(
        session_id=session_id, user_id=USER, product_id="p-404", supplier_id="s-1", quantity=6
    )))

    assert added.data.items[0].supplier_name == "Sweet Inc"
    assert missing.code == StatusCode.PRODUCT_NOT_FOUND


def test_generate_emails_on_empty_session(app_service):
    session_id = create_session(app_service)

    result = run(app_service.generate_emails(GenerateEmailsCommand(session_id=session_id, user_id=USER)))

    assert result.code == StatusCode.SESSION_EMPTY
    assert result.error == "Cannot generate emails for a session with no items"


def test_sent_session_is_closed(app_service):
    session_id = create_session(app_service)
    add_item(app_service, session_id)
    run(app_service.generate_emails(GenerateEmailsCommand(session_id=session_id, user_id=USER)))
    run(app_service.mark_as_sent(MarkAsSentCommand(session_id=session_id, user_id=USER)))

    result = add_item(app_service, session_id, product_name="Salt")

    assert result.code == StatusCode.SESSION_CLOSED
    assert result.error == "Cannot add items to a completed session"


def test_get_user_sessions_groups_by_status(app_service):
    draft_id = create_session(app_service, name="Draft")
    sent_id = create_session(app_service, name="Sent")
    create_session(app_service, name="Someone else", user_id="user-2")
    add_item(app_service, sent_id)
    run(app_service.generate_emails(GenerateEmailsCommand(session_id=sent_id, user_id=USER)))
    run(app_service.mark_as_sent(MarkAsSentCommand(session_id=sent_id, user_id=USER)))

    everything = run(app_service.get_user_sessions(GetUserSessionsQuery(user_id=USER)))
    unfinished = run(app_service.get_user_sessions(GetUserSessionsQuery(user_id=USER, include_completed=False)))

    assert [s.id for s in everything.data.draft] == [draft_id]
    assert [s.id for s in everything.data.sent] == [sent_id]
    assert everything.data.total == 2
    assert [s.id for s in unfinished.data.all] == [draft_id]


def test_session_summary(app_service):
    session_id = create_session(app_service)
    add_item(app_service, session_id)
    add_item(app_service, session_id, product_name="Sugar", quantity=5)

    result = run(app_service.get_session_summary(GetSessionQuery(session_id=session_id, user_id=USER)))

    assert result.data.to_dict() == {
        "session_id": session_id,
        "total_quantity": 15,
        "total_products": 2,
        "supplier_count": 1,
        "status": "draft",
        "is_empty": False,
        "can_generate_emails": True,
        "can_send_emails": False,
    }


def test_replay_and_delete(app_service):
    session_id = create_session(app_service, name="Weekly")
    add_item(app_service, session_id)
    run(app_service.generate_emails(GenerateEmailsCommand(session_id=session_id, user_id=USER)))
    run(app_service.mark_as_sent(MarkAsSentCommand(session_id=session_id, user_id=USER)))

    replay = run(app_service.replay_session(ReplaySessionCommand(
        session_id=session_id, user_id=USER, adjust_quantities=True, quantity_multiplier=0.5
    )))
    deleted = run(app_service.delete_session(DeleteSessionCommand(session_id=session_id, user_id=USER)))
    gone = run(app_service.get_session(GetSessionQuery(session_id=session_id, user_id=USER)))

    assert replay.code == StatusCode.CREATED
    assert replay.data.name == "Weekly (Replay)"
    assert replay.data.status == "draft"
    assert replay.data.items[0].quantity == 5
    assert deleted.code == StatusCode.DELETED
    assert gone.code == StatusCode.SESSION_NOT_FOUND


class BrokenSessionRepository(InMemorySessionRepository):
    async def find_by_id(self, id):
        raise RuntimeError("connection reset")


def test_unexpected_errors_are_raised(factory):
    factory._session_repository = BrokenSessionRepository()
    app_service = factory.create_application_service()

    with pytest.raises(RuntimeError, match="connection reset"):
        run(app_service.get_session(GetSessionQuery(session_id="any", user_id=USER)))
