from probekit.customheader import CustomHeaders


def test_set_appends_in_order():
    headers = CustomHeaders()
    headers.set("User-Agent: test")
    headers.set("Foo: bar")
    assert list(headers) == ["User-Agent: test", "Foo: bar"]


def test_has_is_case_insensitive():
    headers = CustomHeaders()
    headers.set("User-Agent: test")
    assert headers.has("user-agent")
    assert headers.has("USER-AGENT")


def test_has_missing_header():
    headers = CustomHeaders()
    headers.set("Foo: bar")
    assert headers.has("cookie") is False