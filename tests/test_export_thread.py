import json

import pytest

pytest.importorskip("PyQt6.QtWidgets")

from models import ExportConfig
from ui.export_window import MODE_JSON, ExportThread


def test_thread_keeps_its_own_config(red_sprite):
    config = ExportConfig(frame=1)
    thread = ExportThread(red_sprite, config, MODE_JSON)

    config.frame = 5
    config.pretty = True

    assert thread.config is not config
    assert thread.config.frame == 1
    assert thread.config.pretty is False


def test_json_export_uses_config_at_start(red_sprite):
    config = ExportConfig(frame=1)
    thread = ExportThread(red_sprite, config, MODE_JSON)
    results = []
    thread.finished.connect(lambda text, ext: results.append((text, ext)))

    config.frame = 5
    thread.run()

    text, ext = results[0]
    assert ext == "json"
    assert json.loads(text)["frame"] == 1
