from platform_errors.message_resolver import DEFAULT_MESSAGES, DefaultMessageResolver, MessageResolver


def test_default_catalog_covers_every_baseline_code() -> None:
    resolver = DefaultMessageResolver()

    for code in ("BAD_REQUEST", "NOT_FOUND", "INTERNAL_ERROR"):
        assert resolver.has_message(code, "title")
        assert resolver.has_message(code, "detail")
    assert set(resolver.available_error_codes()) == set(DEFAULT_MESSAGES)


def test_unknown_key_resolves_to_none() -> None:
    resolver = DefaultMessageResolver()

    assert resolver.get_message("NO_SUCH_CODE", "title") is None
    assert not resolver.has_message("NO_SUCH_CODE", "detail")


def test_placeholders_are_substituted_and_unknown_ones_kept() -> None:
    resolver = DefaultMessageResolver(
        {"USER_NOT_FOUND": {"title": "User Not Found", "detail": 'User "{userId}" in {tenant} does not exist'}}
    )

    detail = resolver.get_message("USER_NOT_FOUND", "detail", {"userId": "user-123"})

    assert detail == 'User "user-123" in {tenant} does not exist'


def test_empty_catalog_entry_counts_as_missing() -> None:
    resolver = DefaultMessageResolver({"NOT_FOUND": {"title": "", "detail": "Gone"}})

    assert resolver.get_message("NOT_FOUND", "title") is None
    assert resolver.get_message("NOT_FOUND", "detail") == "Gone"


def test_catalog_is_copied_at_construction() -> None:
    catalog = {"NOT_FOUND": {"title": "Not Found", "detail": "Gone"}}
    resolver = DefaultMessageResolver(catalog)

    catalog["NOT_FOUND"]["title"] = "Changed"

    assert resolver.get_message("NOT_FOUND", "title") == "Not Found"


def test_default_resolver_satisfies_protocol() -> None:
    assert isinstance(DefaultMessageResolver(), MessageResolver)
