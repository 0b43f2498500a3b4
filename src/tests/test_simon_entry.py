import pytest

import simon
from simon_system import GameConfig, SignalConfig


def test_cabinet_config_validates():
    config = simon.create_simon_config()
    config.validate()

    assert config.signal_names == ["green", "red", "yellow", "blue"]
    assert len(config.button_config.pins) == config.signal_count


def test_parse_args_defaults():
    args = simon.parse_args([])

    assert not args.mock_audio
    assert not args.keyboard
    assert not args.no_leds
    assert args.scores is None
    assert args.seed is None


def test_parse_args_headless():
    args = simon.parse_args(["--mock-audio", "--keyboard", "--no-leds", "--seed", "7", "--state-file", "state.json"])

    assert args.mock_audio and args.keyboard and args.no_leds
    assert args.seed == 7
    assert args.state_file == "state.json"


def test_sounds_folder_flag():
    assert simon.parse_args([]).sounds is None
    assert simon.parse_args(["--sounds", "/opt/simon/sounds"]).sounds == "/opt/simon/sounds"


def test_help_lists_required_cue_files(capsys):
    with pytest.raises(SystemExit):
        simon.parse_args(["--help"])

    help_text = " ".join(capsys.readouterr().out.split())
    assert "levelup.mp3" in help_text
    assert "gameover.mp3" in help_text


def test_keyboard_uses_color_initials():
    assert simon.keyboard_key_map(GameConfig()) == {"g": 0, "r": 1, "y": 2, "b": 3}


def test_keyboard_falls_back_to_digits_on_clash():
    config = GameConfig(signals=[
        SignalConfig("blue", 392.0, (0, 0, 255)),
        SignalConfig("black", 100.0, (10, 10, 10)),
    ])

    assert simon.keyboard_key_map(config) is None
