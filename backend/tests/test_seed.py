import json

from sqlmodel import select

from historyaddress.models import Home
from historyaddress.services.seed import import_initial_data, load_seed_records
from historyaddress.services.slugs import slugify

from conftest import SAMPLE_DATA


def test_import_sample_data(session):
    """bundled dataset imports once with its own timestamps"""
    assert import_initial_data(session, SAMPLE_DATA) == 5
    levski = session.get(Home, "vasil-levski-karlovo")
    assert levski.slug == "vasil-levski"
    assert levski.tags_list == ["revolutionary", "19th-century"]
    assert levski.created_at.isoformat() == "2025-11-07T12:00:00"

    # second run is a no-op because the table is no longer empty
    assert import_initial_data(session, SAMPLE_DATA) == 0


def test_import_legacy_js_file(session, tmp_path):
    """the people.js script form is accepted"""
    records = [{"name": "Petko Slaveykov House", "tags": ["poet"]}]
    path = tmp_path / "people.js"
    path.write_text("// sample\nwindow.PEOPLE = " + json.dumps(records) + ";\n", encoding="utf-8")

    assert load_seed_records(str(path)) == records
    assert import_initial_data(session, str(path)) == 1
    home = session.exec(select(Home)).one()
    assert home.id == home.slug == "petko-slaveykov-house"


def test_import_skips_bad_records(session, tmp_path):
    """records without a name are skipped, the rest go in"""
    path = tmp_path / "people.json"
    path.write_text(json.dumps([{"name": ""}, {"biography": "no name"}, {"name": "Good One"}]), encoding="utf-8")
    assert import_initial_data(session, str(path)) == 1


def test_import_missing_or_malformed_file(session, tmp_path):
    """missing or broken seed files import nothing"""
    assert import_initial_data(session, str(tmp_path / "absent.json")) == 0

    broken = tmp_path / "broken.json"
    broken.write_text("{ not json", encoding="utf-8")
    assert import_initial_data(session, str(broken)) == 0
    assert session.exec(select(Home)).all() == []


def test_slugify():
    """names become lowercase hyphenated slugs"""
    assert slugify("Vasil Levski House-Museum") == "vasil-levski-house-museum"
    assert slugify("  Paisii Hilendarski Memorial (Bansko) ") == "paisii-hilendarski-memorial-bansko"
    assert slugify("a__b  --c") == "a-b-c"
    assert slugify("Васил Левски") == "васил-левски"
    assert slugify("!!!") == ""


def test_import_skips_duplicate_slug(session, tmp_path):
    """a second record claiming a taken slug is dropped, the rest still import"""
    path = tmp_path / "people.json"
    path.write_text(json.dumps([
        {"id": "levski-1", "slug": "vasil-levski", "name": "Vasil Levski"},
        {"id": "levski-2", "slug": "vasil-levski", "name": "Vasil Levski (copy)"},
        {"id": "ivan-vazov", "name": "Ivan Vazov"},
    ]), encoding="utf-8")

    assert import_initial_data(session, str(path)) == 2
    homes = session.exec(select(Home).order_by(Home.id)).all()
    assert [(h.id, h.slug) for h in homes] == [("ivan-vazov", "ivan-vazov"), ("levski-1", "vasil-levski")]
