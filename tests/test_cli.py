import json
import subprocess
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from unittest import mock

import pytest

from singruleset.cli import main


@pytest.fixture
def server():
    routes = {"/ips.txt": b"1.1.1.1\nnot-an-ip\n10.0.0.0/8\n", "/ads.txt": b"||ads.example.com^\n"}

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            body = routes.get(self.path)
            if body is None:
                self.send_error(404)
                return
            self.send_response(200)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, *args):
            pass

    httpd = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}", routes
    httpd.shutdown()
    httpd.server_close()


def _write_config(directory, base):
    config = {
        "Adguard_Blocklists": [{"name": "ads", "url": f"{base}/ads.txt"}],
        "IP_Lists": [{"name": "ips", "url": f"{base}/ips.txt"}],
    }
    (directory / "config.json").write_text(json.dumps(config), encoding="utf-8")


def test_missing_config_fails(tmp_path):
    assert main(["--workdir", str(tmp_path)]) == 1


def test_missing_workdir_fails(tmp_path):
    assert main(["--workdir", str(tmp_path / "absent")]) == 1


def test_invalid_config_fails(tmp_path):
    (tmp_path / "config.json").write_text("[", encoding="utf-8")
    assert main(["--workdir", str(tmp_path)]) == 1


def test_missing_sing_box_stops_after_download(tmp_path, server):
    base, routes = server
    _write_config(tmp_path, base)
    with mock.patch("subprocess.run", side_effect=FileNotFoundError("sing-box")):
        status = main(["--workdir", str(tmp_path)])
    assert status == 1
    downloaded = tmp_path / "output" / "IP_Lists" / "ips.txt"
    assert downloaded.read_bytes() == routes["/ips.txt"]
    assert not (tmp_path / "output" / "IP_Lists" / "ips.json").exists()


def test_full_run_builds_rule_sets(tmp_path, server):
    base, routes = server
    _write_config(tmp_path, base)
    ok = subprocess.CompletedProcess([], 0, stdout=b"")
    with mock.patch("subprocess.run", return_value=ok) as run:
        status = main(["--workdir", str(tmp_path)])
    assert status == 0

    ads_dir = tmp_path / "output" / "Adguard_Blocklists"
    ip_dir = tmp_path / "output" / "IP_Lists"
    assert (ads_dir / "ads.txt").read_bytes() == routes["/ads.txt"]
    assert json.loads((ip_dir / "ips.json").read_text(encoding="utf-8")) == {
        "version": 1,
        "rules": [{"ip_cidr": ["1.1.1.1", "10.0.0.0/8"]}],
    }

    commands = [call.args[0] for call in run.call_args_list]
    assert ["sing-box", "version"] in commands
    assert [
        "sing-box", "rule-set", "convert", "--type", "adguard",
        "--output", str(ads_dir / "ads.srs"), str(ads_dir / "ads.txt"),
    ] in commands
    assert [
        "sing-box", "rule-set", "compile",
        "--output", str(ip_dir / "ips.srs"), str(ip_dir / "ips.json"),
    ] in commands


def test_failed_download_does_not_abort(tmp_path, server):
    base, _ = server
    config = {"IP_Lists": [{"name": "gone", "url": f"{base}/gone.txt"}]}
    (tmp_path / "config.json").write_text(json.dumps(config), encoding="utf-8")
    ok = subprocess.CompletedProcess([], 0, stdout=b"")
    with mock.patch("subprocess.run", return_value=ok):
        status = main(["--workdir", str(tmp_path)])
    assert status == 0
    assert not (tmp_path / "output" / "IP_Lists" / "gone.json").exists()