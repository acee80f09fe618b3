from mehendi.services.usage import UsageScanner

from fakes import database_down

URL = "https://demo.supabase.co/storage/v1/object/public/gallery/mehendi/category/a.png"


def test_unreferenced_url(rows):
    assert UsageScanner(rows).is_referenced(URL) is False


def test_referenced_by_category_or_product(rows):
    rows.insert("images", {"name": "Leaf", "category_id": 1, "image_url": URL})
    assert UsageScanner(rows).is_referenced(URL) is True


def test_excluded_row_does_not_count(rows):
    category = rows.insert("categories", {"name": "Bridal", "image": URL})
    scanner = UsageScanner(rows)

    assert scanner.is_referenced(URL, exclude=[("category", category["id"])]) is False
    # a product with the same id is a different row
    assert scanner.is_referenced(URL, exclude=[("product", category["id"])]) is True


def test_other_rows_still_count_when_one_is_excluded(rows):
    category = rows.insert("categories", {"name": "Bridal", "image": URL})
    rows.insert("images", {"name": "Leaf", "category_id": category["id"], "image_url": URL})

    assert UsageScanner(rows).is_referenced(URL, exclude=[("category", category["id"])]) is True


def test_scan_failure_assumes_in_use_by_default(rows):
    rows.fail_on["select"] = database_down()
    assert UsageScanner(rows).is_referenced(URL) is True


def test_scan_failure_can_assume_not_in_use(rows):
    rows.fail_on["select"] = database_down()
    assert UsageScanner(rows, assume_in_use_on_failure=False).is_referenced(URL) is False
