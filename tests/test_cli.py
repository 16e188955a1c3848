from unittest import mock

from todo_api import cli


def test_without_serve_flag_does_not_listen(capsys):
    with mock.patch.object(cli.uvicorn, "run") as run:
        assert cli.main([]) == 0
    run.assert_not_called()
    assert "--serve" in capsys.readouterr().out


def test_serve_starts_uvicorn(capsys):
    with mock.patch.object(cli.uvicorn, "run") as run:
        assert cli.main(["--serve", "--port", "4321", "--host", "127.0.0.1"]) == 0
    run.assert_called_once_with("todo_api.main:app", host="127.0.0.1", port=4321)
    assert "http://localhost:4321/api/todos" in capsys.readouterr().out


def test_default_port_comes_from_settings():
    args = cli.parse_args(["--serve"])
    assert args.port == cli.settings.PORT
