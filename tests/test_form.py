# tests/test_form.py
from datetime import date

import pytest

from contact_manager import form
from contact_manager.form import ContactBook, FormState
from contact_manager.schemas import ContactDraft, PictureFile

TODAY = date(2024, 6, 15)


def make_draft(**overrides):
    fields = {
        "first_name": "Ravi",
        "last_name": "Kumar",
        "contact": "+919812345678",
        "birthday": "1990-01-01",
        "email": "ravi@example.com",
    }
    fields.update(overrides)
    return ContactDraft(**fields)


def test_add_assigns_unique_ids():
    book = ContactBook()
    assert book.add(make_draft(), today=TODAY) == {}
    assert book.add(make_draft(first_name="Anil"), today=TODAY) == {}
    ids = [c.id for c in book.contacts]
    assert len(set(ids)) == 2
    assert ids[0] < ids[1]


def test_add_rejects_invalid_record():
    book = ContactBook()
    errors = book.add(make_draft(first_name="ravi"), today=TODAY)
    assert "first_name" in errors
    assert book.contacts == []


def test_edit_keeps_id():
    book = ContactBook()
    book.add(make_draft(), today=TODAY)
    original_id = book.contacts[0].id
    assert book.edit(0, make_draft(email="new@example.com"), today=TODAY) == {}
    assert book.contacts[0].id == original_id
    assert book.contacts[0].email == "new@example.com"


def test_edit_with_invalid_record_changes_nothing():
    book = ContactBook()
    book.add(make_draft(), today=TODAY)
    errors = book.edit(0, make_draft(email="a@b"), today=TODAY)
    assert errors == {"email": "Invalid email address"}
    assert book.contacts[0].email == "ravi@example.com"


def test_delete_then_recover_by_phone():
    """
    Тест локального життєвого циклу: видалення переносить контакт у видалені, відновлення повертає.
    """
    book = ContactBook()
    book.add(make_draft(), today=TODAY)
    entry = book.contacts[0]

    assert book.delete(entry.id) == entry
    assert book.contacts == []
    assert book.deleted_contacts == [entry]

    assert book.recover(" +919812345678 ") == entry
    assert book.contacts == [entry]
    assert book.deleted_contacts == []
    assert book.notice is None


def test_delete_unknown_id():
    book = ContactBook()
    book.add(make_draft(), today=TODAY)
    assert book.delete(12345) is None
    assert len(book.contacts) == 1
    assert book.deleted_contacts == []


def test_recover_unknown_number_sets_notice():
    book = ContactBook()
    book.add(make_draft(), today=TODAY)
    book.delete(book.contacts[0].id)
    assert book.recover("+919876543210") is None
    assert book.notice == form.RECOVER_NOT_FOUND
    assert len(book.deleted_contacts) == 1


def test_recover_takes_first_deleted_match():
    book = ContactBook()
    book.add(make_draft(first_name="Anil"), today=TODAY)
    book.add(make_draft(first_name="Bala"), today=TODAY)
    anil, bala = book.contacts
    book.delete(anil.id)
    book.delete(bala.id)

    assert book.recover("+919812345678") == anil
    assert book.deleted_contacts == [bala]


def test_sort_by_birthday():
    book = ContactBook()
    for name, birthday in (("Anil", "2001-03-04"), ("Bala", "1985-12-31"), ("Chitra", "1999-01-01")):
        book.add(make_draft(first_name=name, birthday=birthday), today=TODAY)
    book.sort("birthday")
    birthdays = [date.fromisoformat(c.birthday) for c in book.contacts]
    assert birthdays == sorted(birthdays)
    assert book.sort_key == "birthday"


def test_sort_by_first_name_is_case_sensitive():
    book = ContactBook()
    for name in ("Chitra", "Anil", "Bala"):
        book.add(make_draft(first_name=name), today=TODAY)
    book.sort("first_name")
    assert [c.first_name for c in book.contacts] == ["Anil", "Bala", "Chitra"]


def test_sort_by_unknown_key():
    with pytest.raises(ValueError):
        ContactBook().sort("picture")


def test_form_state_operations_return_new_state():
    state = FormState()
    changed = form.change_field(state, "first_name", "Ravi")
    assert changed is not state
    assert state.record.first_name == ""
    assert changed.record.first_name == "Ravi"


def test_change_field_clears_its_error():
    state = FormState(errors={"first_name": "First name is required", "email": "Email is required"})
    state = form.change_field(state, "first_name", "Ravi")
    assert state.errors == {"email": "Email is required"}


def test_change_unknown_field():
    with pytest.raises(ValueError):
        form.change_field(FormState(), "nickname", "R")


def test_change_picture_rejects_bad_file():
    state = form.change_picture(FormState(), PictureFile(filename="a.gif", content_type="image/gif", size=10))
    assert state.errors == {"picture": "Only JPG or PNG allowed"}
    assert state.record.picture is None
    assert state.preview is None

    state = form.change_picture(state, PictureFile(filename="a.png", content_type="image/png", size=3 * 1024 * 1024))
    assert state.errors == {"picture": "Max size is 2MB"}
    assert state.record.picture is None


def test_change_picture_accepts_image():
    picture = PictureFile(filename="a.png", content_type="image/png", size=1024)
    state = form.change_picture(FormState(errors={"picture": "Max size is 2MB"}), picture)
    assert state.record.picture == picture
    assert state.preview == "a.png"
    assert state.errors == {}


def test_submit_adds_and_resets_form():
    book = ContactBook()
    state = FormState(record=make_draft(), preview="a.png")
    state = form.submit(state, book, today=TODAY)
    assert state == FormState()
    assert len(book.contacts) == 1
    assert book.contacts[0].picture == "a.png"


def test_submit_with_errors_keeps_record():
    book = ContactBook()
    draft = make_draft(contact="+911234567890")
    state = form.submit(FormState(record=draft), book, today=TODAY)
    assert state.record == draft
    assert state.errors == {"contact": "Number cannot start with 1 or 2 after +91"}
    assert book.contacts == []


def test_edit_through_form():
    book = ContactBook()
    book.add(make_draft(), preview="old.png", today=TODAY)
    original_id = book.contacts[0].id

    state = form.start_edit(FormState(), book, 0)
    assert state.editing_index == 0
    assert state.preview == "old.png"
    assert state.record.first_name == "Ravi"

    state = form.change_field(state, "last_name", "Sharma")
    state = form.submit(state, book, today=TODAY)
    assert state.editing_index is None
    assert book.contacts[0].id == original_id
    assert book.contacts[0].last_name == "Sharma"
    assert book.contacts[0].picture == "old.png"


def test_recover_through_form():
    book = ContactBook()
    book.add(make_draft(), today=TODAY)
    book.delete(book.contacts[0].id)

    state = form.set_recover_input(FormState(), "+919800000000")
    state = form.recover(state, book)
    assert state.recover_input == "+919800000000"
    assert book.notice == form.RECOVER_NOT_FOUND

    state = form.set_recover_input(state, "+919812345678")
    state = form.recover(state, book)
    assert state.recover_input == ""
    assert len(book.contacts) == 1
    assert book.deleted_contacts == []


@pytest.mark.parametrize("index", [-1, 2, 5])
def test_edit_rejects_position_outside_list(index):
    book = ContactBook()
    book.add(make_draft(first_name="Anil"), today=TODAY)
    book.add(make_draft(first_name="Bala"), today=TODAY)
    with pytest.raises(IndexError):
        book.edit(index, make_draft(first_name="Zed"), today=TODAY)
    assert [c.first_name for c in book.contacts] == ["Anil", "Bala"]


@pytest.mark.parametrize("index", [-1, 1])
def test_start_edit_rejects_position_outside_list(index):
    book = ContactBook()
    book.add(make_draft(), today=TODAY)
    with pytest.raises(IndexError):
        form.start_edit(FormState(), book, index)


def test_sort_puts_uppercase_before_lowercase():
    """
    Тест сортування з урахуванням регістру: великі літери йдуть перед малими.
    """
    book = ContactBook()
    for name, email in (("Anil", "b@x.com"), ("Bala", "B@x.com"), ("Chitra", "a@x.com")):
        book.add(make_draft(first_name=name, email=email), today=TODAY)
    book.sort("email")
    assert [c.email for c in book.contacts] == ["B@x.com", "a@x.com", "b@x.com"]
