# restodesk

restodesk is the storage layer of a small restaurant's back office. It keeps
dining tables, menu categories, dishes, staff accounts and bills in one
SQLite database. It adds the rules for ordering dishes on a table and settling
the bill, and a pager for moving through long lists with the keyboard.

## Modules

- `restodesk.models` holds plain dataclasses: `Bill`, `BillItem`,
  `Category`, `Food`, `Table` and `User`. It also holds `Result`, which
  carries an `ok` flag and a `message` and is truthy when `ok` is set.
- `restodesk.database` has `Database`, which wraps a SQLite connection
  (`":memory:"` by default) and works as a context manager. `create_schema()`
  creates the tables, and `execute`, `fetch_all` and `fetch_one` run
  statements. Any SQLite failure is raised as `DatabaseError`. The module's
  helpers are `like_pattern(keyword)` and `order_by_clause(column, ascending)`.
- The data access classes each take a `Database`. They are `CategoryDAL`
  (`restodesk.category_dal`), `TableDAL` (`restodesk.table_dal`), `FoodDAL`
  (`restodesk.food_dal`), `UserDAL` (`restodesk.user_dal`) and `BillDAL`
  (`restodesk.bill_dal`). Each one offers `get_all`, `get_by_id` (returns
  `None` when nothing matches), insert, update and remove operations, and
  `search_by_*` and `get_all_sorted_by_*` queries. A search given an empty
  keyword, or an out-of-range value, returns every row. `UserDAL.get_all`
  returns only regular employees (role 0). `UserDAL.login` returns the
  matching account or `None`.
- `restodesk.bill_bll.BillBLL` builds on `BillDAL`, `TableDAL` and `FoodDAL`:
  - `add_food_to_table` checks the table, the dish and the quantity (1 to
    100). It opens a bill when the table has none, adds the item, updates
    the total and marks the table occupied.
  - `update_bill_item` and `delete_bill_item` change or remove an item. When
    the last item goes, the bill is deleted and the table is freed.
  - `checkout_table` stamps the bill's payment time and frees the table.
  - `get_current_items_of_table` returns a `CurrentBill` holding the bill,
    its items and its total, or `None`.
  - The search and sort methods return an empty list on failure.
  - Messages in a `Result` are short Vietnamese phrases without diacritics.
- `restodesk.paging` provides:
  - `Key`, the keys a console screen reacts to.
  - `decode_key(code, extended)`, which maps console key codes to a `Key`.
    Arrow keys arrive as prefix 0 or 224 followed by the extended code.
  - `Pager`, which tracks the current page and the selected row. It shows 7
    rows per page by default. `handle_key` returns a `NavResult`: `NONE`,
    `MOVED` or `PAGE_CHANGED`.

## Example

```python
from restodesk.database import Database
from restodesk.table_dal import TableDAL
from restodesk.category_dal import CategoryDAL
from restodesk.food_dal import FoodDAL
from restodesk.bill_dal import BillDAL
from restodesk.bill_bll import BillBLL
from restodesk.models import Table, Category, Food

with Database() as db:
    db.create_schema()
    tables, categories, foods = TableDAL(db), CategoryDAL(db), FoodDAL(db)

    table_id = tables.insert(Table(number=1, capacity=4))
    category_id = categories.insert(Category(name="Soup"))
    food_id = foods.insert(Food(name="Pho", category_id=category_id, price=50000))

    bills = BillBLL(BillDAL(db), tables, foods)
    print(bills.add_food_to_table(table_id, food_id, 2, "no onion").message)
    current = bills.get_current_items_of_table(table_id)
    print(current.total)                       # 100000.0
    print(bills.checkout_table(table_id).message)
    print(tables.get_by_id(table_id).status_id)  # 0, the table is free again
```

```python
from restodesk.paging import Pager, Key, NavResult

pager = Pager(range(20))
assert pager.handle_key(Key.RIGHT) is NavResult.PAGE_CHANGED
print(pager.current_page, pager.selected_index)  # 2 7
```

## What it does not do

- Only bills have a business-rule layer. Tables, categories, dishes and staff
  accounts are written through their data access classes as given. Nothing
  checks field lengths, duplicate names or table numbers, ranges, or dates of
  birth.
- `UserDAL.login` only looks up an account. There is no session, no record
  of the current user and no permission check. Passwords are stored and
  compared as plain text.
- There is no revenue reporting or statistics.
- There are no console screens and no command to run. `restodesk.paging`
  decodes keys and tracks list navigation, but it draws nothing.

## Tests

```
pip install -e .[test]
pytest
```