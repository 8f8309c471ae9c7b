from probekit.response import ChainItem, CSPData, Response


def _chain():
    return [
        ChainItem(request="req0", response="resp0", status_code=301, request_url="http://a"),
        ChainItem(request="req1", response="resp1", status_code=302, request_url="http://b"),
        ChainItem(request="req2", response="resp2", status_code=200, request_url="http://c"),
    ]


def test_get_header_joins_values():
    resp = Response(headers={"Vary": ["Accept", "Origin"]})
    assert resp.get_header("Vary") == " ".join(["Accept", "Origin"])
    assert resp.get_header("Missing") == ""


def test_get_header_part():
    resp = Response(headers={"Content-Type": ["text/html; charset=utf-8"]})
    assert resp.get_header_part("Content-Type", ";") == "text/html"
    assert resp.get_header_part("Server", ";") == ""


def test_chain_status_codes_and_last_url():
    resp = Response(chain=_chain())
    assert resp.get_chain_status_codes() == [301, 302, 200]
    assert resp.has_chain()
    assert resp.get_chain_last_url() == "http://c"


def test_get_chain_order():
    resp = Response(chain=_chain())
    assert resp.get_chain() == "resp0" + "req1" + "resp1" + "req2"


def test_single_item_is_not_a_chain():
    resp = Response(chain=_chain()[:1])
    assert not resp.has_chain()
    assert resp.get_chain_last_url() == ""
    assert resp.get_chain() == ""


def test_get_chain_as_list_copies():
    resp = Response(chain=_chain())
    copied = resp.get_chain_as_list()
    assert copied == resp.chain
    copied[0].status_code = 500
    assert resp.chain[0].status_code == 301


def test_chain_item_as_dict_omits_empty():
    item = ChainItem(status_code=200, request_url="http://a")
    assert item.as_dict() == {"status_code": 200, "request-url": "http://a"}


def test_csp_data_as_dict():
    assert CSPData().as_dict() == {}
    assert CSPData(domains=["a.example.com"]).as_dict() == {"domains": ["a.example.com"]}