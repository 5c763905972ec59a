import pytest
from hal_normalize import normalize
from hal_normalize.core.options import resolve_options
from hal_normalize.core.standalone import reconcile_collections, virtual_key

POST = "http://example.com/posts/2620"
QUESTION = "http://example.com/questions/295"


def post_document(links=None):
    return {
        "id": "2620",
        "text": "hello",
        "_embedded": {
            "questions": [
                {
                    "id": 295,
                    "text": "Why?",
                    "_meta": {"expires_at": 1513868982},
                    "_links": {"self": {"href": QUESTION}},
                }
            ]
        },
        "_links": {"self": {"href": POST}, **(links or {})},
    }


QUESTION_RECORD = {
    "id": 295,
    "text": "Why?",
    "_meta": {"self": QUESTION, "expiresAt": 1513868982},
}


def test_embedded_standalone_list():
    document = post_document(
        {"questions": {"href": "http://example.com/questions?post=2620"}}
    )

    result = normalize(document, embedded_standalone_list_key="items")

    assert result == {
        POST: {
            "id": "2620",
            "text": "hello",
            "questions": {"href": "http://example.com/questions?post=2620"},
            "_meta": {"self": POST},
        },
        "http://example.com/questions?post=2620": {
            "items": [{"href": QUESTION}],
            "_meta": {"self": "http://example.com/questions?post=2620"},
        },
        QUESTION: QUESTION_RECORD,
    }


def test_standalone_link_is_canonicalized():
    document = post_document(
        {"questions": {"href": "http://example.com/questions?sort=id&post=2620"}}
    )

    result = normalize(
        document, embeddedStandaloneListKey="items", baseUrl="http://example.com"
    )

    assert result["/posts/2620"]["questions"] == {"href": "/questions?post=2620&sort=id"}
    assert result["/questions?post=2620&sort=id"] == {
        "items": [{"href": "/questions/295"}],
        "_meta": {"self": "/questions?post=2620&sort=id"},
    }


def test_embedded_list_stays_inline_without_link_or_virtual_links():
    result = normalize(post_document(), embedded_standalone_list_key="items")

    assert result[POST]["questions"] == [{"href": QUESTION}]
    assert set(result) == {POST, QUESTION}


def test_virtual_self_link_for_embedded_list():
    result = normalize(
        post_document(), embedded_standalone_list_key="items", virtual_self_links=True
    )

    key = f"{POST}#questions"
    assert result == {
        POST: {
            "id": "2620",
            "text": "hello",
            "questions": {"href": key, "virtual": True},
            "_meta": {"self": POST},
        },
        key: {
            "items": [{"href": QUESTION}],
            "_meta": {
                "self": key,
                "virtual": True,
                "owningResource": POST,
                "owningRelation": "questions",
            },
        },
        QUESTION: QUESTION_RECORD,
    }


def test_existing_standalone_link_beats_virtual_link():
    document = post_document({"questions": {"href": "http://example.com/q?post=2620"}})

    result = normalize(
        document, embedded_standalone_list_key="items", virtual_self_links=True
    )

    assert result[POST]["questions"] == {"href": "http://example.com/q?post=2620"}
    assert f"{POST}#questions" not in result


def test_templated_link_is_not_a_standalone_identity():
    document = post_document(
        {"questions": {"href": "http://example.com/q{?post}", "templated": True}}
    )

    result = normalize(
        document, embedded_standalone_list_key="items", virtual_self_links=True
    )

    assert result[POST]["questions"] == {"href": f"{POST}#questions", "virtual": True}
    assert "http://example.com/q{?post}" not in result


def test_link_array_replaced_by_virtual_record_for_embedded_list():
    document = post_document({"questions": [{"href": QUESTION}]})

    result = normalize(
        document, embedded_standalone_list_key="items", virtual_self_links=True
    )

    assert result[POST]["questions"] == {"href": f"{POST}#questions", "virtual": True}
    assert result[f"{POST}#questions"]["items"] == [{"href": QUESTION}]


def test_link_only_array_hoisted_to_virtual_record():
    document = {
        "_links": {
            "self": {"href": "/wp/1"},
            "watchers": [{"href": "/users/5", "title": "Ada"}],
            "project": {"href": "/projects/7"},
        }
    }

    result = normalize(
        document, embedded_standalone_list_key="items", virtual_self_links=True
    )

    assert result == {
        "/wp/1": {
            "watchers": {"href": "/wp/1#watchers", "virtual": True},
            "project": {"href": "/projects/7"},
            "_meta": {"self": "/wp/1"},
        },
        "/wp/1#watchers": {
            "items": [{"href": "/users/5", "title": "Ada"}],
            "_meta": {
                "self": "/wp/1#watchers",
                "virtual": True,
                "owningResource": "/wp/1",
                "owningRelation": "watchers",
            },
        },
    }


def test_link_only_array_kept_inline_without_virtual_links():
    document = {"_links": {"self": {"href": "/wp/1"}, "watchers": [{"href": "/users/5"}]}}

    result = normalize(document, embedded_standalone_list_key="items")

    assert result["/wp/1"]["watchers"] == [{"href": "/users/5"}]


def test_relation_named_like_list_key_is_not_virtualized():
    document = {
        "_embedded": {"items": [{"id": 1, "_links": {"self": {"href": "/items/1"}}}]},
        "_links": {"self": {"href": "/items"}},
    }

    result = normalize(
        document, embedded_standalone_list_key="items", virtual_self_links=True
    )

    assert result["/items"]["items"] == [{"href": "/items/1"}]
    assert "/items#items" not in result


def test_nested_collections_get_virtual_records(fixture_loader):
    result = normalize(
        fixture_loader("work_package_collection.json"),
        embedded_standalone_list_key="items",
        virtual_self_links=True,
    )

    collection = "/api/v3/work_packages?pageSize=2&offset=1"
    assert result[collection]["elements"] == {
        "href": f"{collection}#elements",
        "virtual": True,
    }
    assert result[f"{collection}#elements"]["items"] == [
        {"href": "/api/v3/work_packages/10001"},
        {"href": "/api/v3/work_packages/10002"},
    ]
    assert result["/api/v3/work_packages/10002"]["watchers"] == {
        "href": "/api/v3/work_packages/10002#watchers",
        "virtual": True,
    }
    for key, record in result.items():
        assert record["_meta"]["self"] == key


def test_reconcile_collections_direct():
    opts = resolve_options(embedded_standalone_list_key="members", meta_key="meta")
    embedded = {"/teams/1": {"people": [{"href": "/people/1"}]}, "/people/1": {"id": 1}}
    links = {"/teams/1": {"people": {"href": "/people?team=1"}}}

    result = reconcile_collections("/teams/1", embedded, links, opts)

    assert result == {
        "/teams/1": {"people": {"href": "/people?team=1"}},
        "/people/1": {"id": 1},
        "/people?team=1": {
            "members": [{"href": "/people/1"}],
            "meta": {"self": "/people?team=1"},
        },
    }


@pytest.mark.parametrize(
    "owner,relation,expected",
    [("/posts/1", "questions", "/posts/1#questions"), ("", "root", "#root")],
)
def test_virtual_key(owner, relation, expected):
    assert virtual_key(owner, relation) == expected


def test_standalone_link_hoists_collection_with_minimal_document():
    document = {
        "_embedded": {"questions": [{"id": 1, "_links": {"self": {"href": "/q/1"}}}]},
        "_links": {"self": {"href": "/p/1"}, "questions": {"href": "/q?post=1"}},
    }

    result = normalize(document, embedded_standalone_list_key="items")

    assert result == {
        "/p/1": {"questions": {"href": "/q?post=1"}, "_meta": {"self": "/p/1"}},
        "/q?post=1": {"items": [{"href": "/q/1"}], "_meta": {"self": "/q?post=1"}},
        "/q/1": {"id": 1, "_meta": {"self": "/q/1"}},
    }


def test_reconcile_collections_leaves_fragments_untouched():
    opts = resolve_options(embedded_standalone_list_key="items")
    embedded = {"/p/1": {"questions": [{"href": "/q/1"}]}}
    links = {"/p/1": {"questions": {"href": "/q?post=1"}}}

    reconcile_collections("/p/1", embedded, links, opts)

    assert links == {"/p/1": {"questions": {"href": "/q?post=1"}}}
    assert embedded == {"/p/1": {"questions": [{"href": "/q/1"}]}}
