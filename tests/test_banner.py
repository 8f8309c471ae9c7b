from probekit.banner import BANNER, VERSION, show_banner


def test_banner_goes_to_stderr(capsys):
    show_banner()
    captured = capsys.readouterr()
    assert BANNER in captured.err
    assert captured.out == ""


def test_banner_shows_version(capsys):
    show_banner()
    err = capsys.readouterr().err
    assert f"\t\t{VERSION}\n" in err
    assert err.index(BANNER) < err.index(VERSION)