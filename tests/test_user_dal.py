import pytest

from restodesk.database import Database, DatabaseError
from restodesk.models import User
from restodesk.user_dal import UserDAL

password = "password"
wrong_password = "secret"


@pytest.fixture
def db():
    database = Database()
    database.create_schema()
    yield database
    database.close()


@pytest.fixture
def dal(db):
    return UserDAL(db)


@pytest.fixture
def seeded(dal):
    ids = {}
    ids["alice"] = dal.insert(
        User(user_name="alice", password=password, full_name="Alice Nguyen",
             phone_number="111", birth="1990-05-01", gender_id=1, role_id=0)
    )
    ids["bob"] = dal.insert(
        User(user_name="bob", password=password, full_name="Bob Tran",
             phone_number="222", birth="1985-12-12", gender_id=0, role_id=0)
    )
    ids["admin"] = dal.insert(
        User(user_name="admin", password=password, full_name="Admin Le",
             phone_number="333", birth="1980-01-01", gender_id=1, role_id=1)
    )
    return ids


def names(users):
    return [u.user_name for u in users]


def test_insert_and_get_by_id_round_trip(dal, seeded):
    user = dal.get_by_id(seeded["alice"])
    assert user == User(
        id=seeded["alice"], user_name="alice", password=password,
        full_name="Alice Nguyen", phone_number="111", birth="1990-05-01",
        gender_id=1, role_id=0,
    )


def test_get_by_id_missing_returns_none(dal, seeded):
    assert dal.get_by_id(9999) is None


def test_get_all_lists_only_employees_in_id_order(dal, seeded):
    assert names(dal.get_all()) == ["alice", "bob"]


def test_login_success_and_failure(dal, seeded):
    user = dal.login("admin", password)
    assert user is not None and user.id == seeded["admin"]
    assert dal.login("admin", wrong_password) is None
    assert dal.login("nobody", password) is None


def test_update_changes_fields(dal, seeded):
    user = dal.get_by_id(seeded["bob"])
    user.full_name = "Robert Tran"
    user.gender_id = 1
    assert dal.update(user) is True
    stored = dal.get_by_id(seeded["bob"])
    assert stored.full_name == "Robert Tran"
    assert stored.gender_id == 1


def test_remove_deletes(dal, seeded):
    assert dal.remove(seeded["bob"]) is True
    assert dal.get_by_id(seeded["bob"]) is None
    assert names(dal.get_all()) == ["alice"]


def test_insert_truncates_full_name(dal):
    user_id = dal.insert(User(user_name="long", password=password, full_name="x" * 200,
                              birth="2000-01-01"))
    assert len(dal.get_by_id(user_id).full_name) == 127


def test_search_by_user_name(dal, seeded):
    assert sorted(names(dal.search_by_user_name("a"))) == ["admin", "alice"]
    assert names(dal.search_by_user_name("")) == ["alice", "bob"]


def test_search_by_full_name(dal, seeded):
    assert names(dal.search_by_full_name("tran")) == ["bob"]
    assert names(dal.search_by_full_name("")) == ["alice", "bob"]


def test_search_by_phone(dal, seeded):
    assert names(dal.search_by_phone("33")) == ["admin"]
    assert names(dal.search_by_phone("")) == ["alice", "bob"]


def test_search_by_gender_id(dal, seeded):
    assert sorted(names(dal.search_by_gender_id(1))) == ["admin", "alice"]
    assert names(dal.search_by_gender_id(5)) == ["alice", "bob"]


def test_search_by_role_id(dal, seeded):
    assert names(dal.search_by_role_id(1)) == ["admin"]
    assert names(dal.search_by_role_id(7)) == []


def test_search_by_birth_year(dal, seeded):
    assert names(dal.search_by_birth_year(1985)) == ["bob"]
    assert names(dal.search_by_birth_year(0)) == ["alice", "bob"]


def test_sorted_by_user_name(dal, seeded):
    assert names(dal.get_all_sorted_by_user_name(True)) == ["admin", "alice", "bob"]
    assert names(dal.get_all_sorted_by_user_name(False)) == ["bob", "alice", "admin"]


def test_sorted_by_full_name(dal, seeded):
    assert names(dal.get_all_sorted_by_full_name(True)) == ["admin", "alice", "bob"]


def test_sorted_by_birth(dal, seeded):
    assert names(dal.get_all_sorted_by_birth(True)) == ["admin", "bob", "alice"]
    assert names(dal.get_all_sorted_by_birth(False)) == ["alice", "bob", "admin"]


def test_sorted_by_role_and_gender(dal, seeded):
    assert dal.get_all_sorted_by_role(True)[-1].user_name == "admin"
    assert dal.get_all_sorted_by_role(False)[0].user_name == "admin"
    assert dal.get_all_sorted_by_gender(True)[0].user_name == "bob"


def test_storage_failure(dal, db, seeded):
    db.close()
    assert dal.search_by_user_name("a") == []
    assert dal.get_all_sorted_by_role(True) == []
    with pytest.raises(DatabaseError):
        dal.get_all()