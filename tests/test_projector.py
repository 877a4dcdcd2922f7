from promptfinder.search.projector import project_record, project_records


def test_absent_fields_default_to_empty():
    c = project_record({"id": "1"})
    assert (c.title, c.description, c.body, c.category) == ("", "", "", "")
    assert c.tags == ()
    assert c.is_private is False
    assert c.owner_id == ""


def test_non_string_values_are_coerced():
    c = project_record({
        "id": 7,
        "title": None,
        "description": 12,
        "text": ["not", "text"],
        "category": {"a": 1},
        "tags": "single-tag",
        "isPrivate": 1,
        "userId": 99,
    })
    assert c.id == "7"
    assert (c.title, c.description, c.body, c.category) == ("", "", "", "")
    assert c.tags == ()
    assert c.is_private is True
    assert c.owner_id == ""


def test_non_string_tags_are_dropped():
    assert project_record({"id": "1", "tags": ["ok", 3, None, "fine"]}).tags == ("ok", "fine")


def test_body_read_from_text_or_body():
    assert project_record({"id": "1", "text": "from text"}).body == "from text"
    assert project_record({"id": "1", "body": "from body"}).body == "from body"


def test_source_record_is_not_mutated():
    record = {"id": "1", "title": "T", "tags": ["a"], "extra": {"k": "v"}}
    snapshot = {"id": "1", "title": "T", "tags": ["a"], "extra": {"k": "v"}}
    project_records([record])
    assert record == snapshot
