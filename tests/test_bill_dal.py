import re

import pytest

from restodesk.bill_dal import BillDAL
from restodesk.database import Database, DatabaseError
from restodesk.food_dal import FoodDAL
from restodesk.models import Food, Table
from restodesk.table_dal import TableDAL

PRICE_SOUP = 30000.0
PRICE_RICE = 45000.0


@pytest.fixture
def env():
    db = Database(":memory:")
    db.create_schema()
    tables = TableDAL(db)
    foods = FoodDAL(db)
    t1 = tables.insert(Table(number=1, capacity=4, status_id=0))
    t2 = tables.insert(Table(number=2, capacity=6, status_id=0))
    soup = foods.insert(Food(name="Soup", category_id=None, price=PRICE_SOUP))
    rice = foods.insert(Food(name="Rice", category_id=None, price=PRICE_RICE))
    yield {"db": db, "dal": BillDAL(db), "t1": t1, "t2": t2, "soup": soup, "rice": rice}
    db.close()


def test_no_open_bill_initially(env):
    assert env["dal"].get_open_by_table_id(env["t1"]) is None


def test_create_and_get_open(env):
    dal = env["dal"]
    bill_id = dal.create_for_table(env["t1"])
    bill = dal.get_open_by_table_id(env["t1"])
    assert bill.id == bill_id
    assert bill.table_id == env["t1"]
    assert bill.total_price == 0
    assert bill.paid_date == ""


def test_open_bill_is_latest(env):
    dal = env["dal"]
    dal.create_for_table(env["t1"])
    second = dal.create_for_table(env["t1"])
    assert dal.get_open_by_table_id(env["t1"]).id == second


def test_add_item_sub_total(env):
    dal = env["dal"]
    bill_id = dal.create_for_table(env["t1"])
    item_id = dal.add_item(bill_id, env["soup"], 3, "no onion")
    items = dal.list_items_by_bill(bill_id)
    assert [i.id for i in items] == [item_id]
    assert items[0].sub_total == PRICE_SOUP * 3
    assert items[0].quantity == 3
    assert items[0].description == "no onion"


def test_non_positive_quantity_counts_as_one(env):
    dal = env["dal"]
    bill_id = dal.create_for_table(env["t1"])
    dal.add_item(bill_id, env["soup"], 0, "")
    assert dal.list_items_by_bill(bill_id)[0].sub_total == PRICE_SOUP


def test_add_unknown_food_raises(env):
    dal = env["dal"]
    bill_id = dal.create_for_table(env["t1"])
    with pytest.raises(LookupError):
        dal.add_item(bill_id, 999, 1, "")


def test_description_truncated(env):
    dal = env["dal"]
    bill_id = dal.create_for_table(env["t1"])
    dal.add_item(bill_id, env["soup"], 1, "x" * 400)
    assert len(dal.list_items_by_bill(bill_id)[0].description) == 259


def test_recalc_total(env):
    dal = env["dal"]
    bill_id = dal.create_for_table(env["t1"])
    dal.add_item(bill_id, env["soup"], 2, "")
    dal.add_item(bill_id, env["rice"], 1, "")
    assert dal.recalc_total(bill_id) is True
    assert dal.get_by_id(bill_id).total_price == PRICE_SOUP * 2 + PRICE_RICE


def test_recalc_empty_bill_is_zero(env):
    dal = env["dal"]
    bill_id = dal.create_for_table(env["t1"])
    dal.recalc_total(bill_id)
    assert dal.get_by_id(bill_id).total_price == 0


def test_update_item(env):
    dal = env["dal"]
    bill_id = dal.create_for_table(env["t1"])
    item_id = dal.add_item(bill_id, env["rice"], 1, "")
    assert dal.update_item(item_id, 4, "spicy") is True
    item = dal.list_items_by_bill(bill_id)[0]
    assert item.quantity == 4
    assert item.description == "spicy"
    assert item.sub_total == PRICE_RICE * 4


def test_update_missing_item(env):
    assert env["dal"].update_item(12345, 2, "") is False


def test_remove_item_and_count(env):
    dal = env["dal"]
    bill_id = dal.create_for_table(env["t1"])
    first = dal.add_item(bill_id, env["soup"], 1, "")
    dal.add_item(bill_id, env["rice"], 1, "")
    assert dal.count_items(bill_id) == 2
    dal.remove_item(first)
    assert dal.count_items(bill_id) == 1
    assert all(i.id != first for i in dal.list_items_by_bill(bill_id))


def test_item_context(env):
    dal = env["dal"]
    bill_id = dal.create_for_table(env["t2"])
    item_id = dal.add_item(bill_id, env["soup"], 1, "")
    assert dal.get_item_context(item_id) == (bill_id, env["t2"])
    assert dal.get_item_context(item_id + 100) is None


def test_close_bill(env):
    dal = env["dal"]
    bill_id = dal.create_for_table(env["t1"])
    dal.close_bill(bill_id)
    paid = dal.get_by_id(bill_id).paid_date
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", paid)
    assert dal.get_open_by_table_id(env["t1"]) is None


def test_close_twice_keeps_date(env):
    dal = env["dal"]
    db = env["db"]
    bill_id = dal.create_for_table(env["t1"])
    db.execute("UPDATE bills SET paid_date=? WHERE bill_id=?", ["2024-01-02 10:00:00", bill_id])
    dal.close_bill(bill_id)
    assert dal.get_by_id(bill_id).paid_date == "2024-01-02 10:00:00"


def test_delete_bill(env):
    dal = env["dal"]
    bill_id = dal.create_for_table(env["t1"])
    dal.delete_bill(bill_id)
    assert dal.get_by_id(bill_id) is None
    assert dal.get_all() == []


def test_search_by_status(env):
    dal = env["dal"]
    open_id = dal.create_for_table(env["t1"])
    paid_id = dal.create_for_table(env["t2"])
    dal.close_bill(paid_id)
    assert [b.id for b in dal.search_by_status(True)] == [paid_id]
    assert [b.id for b in dal.search_by_status(False)] == [open_id]


def test_search_by_table_number(env):
    dal = env["dal"]
    a = dal.create_for_table(env["t1"])
    b = dal.create_for_table(env["t2"])
    assert [x.id for x in dal.search_by_table_number(env["t2"])] == [b]
    assert [x.id for x in dal.search_by_table_number(0)] == [a, b]


def test_search_by_date_range(env):
    dal = env["dal"]
    db = env["db"]
    a = dal.create_for_table(env["t1"])
    b = dal.create_for_table(env["t2"])
    db.execute("UPDATE bills SET paid_date=? WHERE bill_id=?", ["2024-03-05 12:00:00", a])
    db.execute("UPDATE bills SET paid_date=? WHERE bill_id=?", ["2024-05-05 12:00:00", b])
    found = dal.search_by_date_range("2024-03-01", "2024-03-31")
    assert [x.id for x in found] == [a]
    assert len(dal.search_by_date_range("", "2024-03-31")) == 2


def test_search_by_price_range_and_sort(env):
    dal = env["dal"]
    cheap = dal.create_for_table(env["t1"])
    dal.add_item(cheap, env["soup"], 1, "")
    dal.recalc_total(cheap)
    dear = dal.create_for_table(env["t2"])
    dal.add_item(dear, env["rice"], 2, "")
    dal.recalc_total(dear)
    assert [b.id for b in dal.search_by_price_range(PRICE_SOUP, PRICE_SOUP)] == [cheap]
    assert [b.id for b in dal.get_all_sorted_by_total_price(False)] == [dear, cheap]
    assert [b.id for b in dal.get_all_sorted_by_total_price()] == [cheap, dear]


def test_sorted_by_id_and_table(env):
    dal = env["dal"]
    a = dal.create_for_table(env["t2"])
    b = dal.create_for_table(env["t1"])
    assert [x.id for x in dal.get_all_sorted_by_bill_id(False)] == [b, a]
    assert [x.table_id for x in dal.get_all_sorted_by_table_number()] == [env["t1"], env["t2"]]


def test_sorted_by_paid_date(env):
    dal = env["dal"]
    db = env["db"]
    a = dal.create_for_table(env["t1"])
    b = dal.create_for_table(env["t2"])
    db.execute("UPDATE bills SET paid_date=? WHERE bill_id=?", ["2024-06-01 00:00:00", a])
    db.execute("UPDATE bills SET paid_date=? WHERE bill_id=?", ["2024-02-01 00:00:00", b])
    assert [x.id for x in dal.get_all_sorted_by_paid_date()] == [b, a]


def test_failures_on_closed_database(env):
    dal = env["dal"]
    env["db"].close()
    assert dal.search_by_status(True) == []
    assert dal.get_all_sorted_by_bill_id() == []
    with pytest.raises(DatabaseError):
        dal.get_all()