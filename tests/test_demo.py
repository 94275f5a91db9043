from avlmap.config import DEMO_KEYS_ENV
from avlmap.demo import run_demo


def test_demo_runs_default_scenario(monkeypatch, capsys):
    monkeypatch.delenv(DEMO_KEYS_ENV, raising=False)
    mymap = run_demo()
    out = capsys.readouterr().out
    assert "Inserted 6 entries" in out
    assert "height=3" in out
    assert "  - 2: -101" in out
    assert "After delete(3): keys=[0, 1, 2, 4, 5]" in out
    assert list(mymap) == [0, 1, 2, 4, 5]


def test_demo_uses_env_items(monkeypatch, capsys):
    monkeypatch.setenv(DEMO_KEYS_ENV, "9:1,8:2")
    mymap = run_demo()
    assert list(mymap.items()) == [(8, 2), (9, 1)]
    assert "After delete" not in capsys.readouterr().out
