"""
SimonEngine state machine tests, driven by a fake clock
"""

import pytest

from audio_system import GameSounds, MockSoundController
from simon_system import GameConfig, Phase, TimingConfig

from conftest import (
    FailingScoreSink, FailingStateSink, play_correct_round, run_until, run_until_phase
)


def test_engine_starts_idle(make_engine):
    engine = make_engine()

    assert engine.phase is Phase.IDLE
    assert engine.score == 0
    assert engine.sequence == ()
    assert not engine.is_playing
    assert engine.score_label == "PLAY"
    assert engine.highlights == (False, False, False, False)
    assert engine.get_current_state_name() == "IdleState"


def test_full_example_game(make_engine, clock, score_sink):
    engine = make_engine(script=[2, 0])
    start_ms = clock.ms

    engine.start("red")
    assert engine.phase is Phase.GENERATING
    assert engine.is_playing
    assert engine.score_label == 0

    # Startup delay before the first signal is generated
    clock.advance(299)
    engine.update()
    assert engine.sequence == ()

    clock.advance(1)
    engine.update()
    assert engine.phase is Phase.PLAYING
    assert engine.sequence == (2,)
    assert engine.highlights == (False, False, True, False)
    assert engine.sound_controller.tones_played == [(330.0, 300)]

    clock.advance(300)
    engine.update()
    assert engine.phase is Phase.AWAITING_INPUT
    assert engine.highlights == (False, False, False, False)
    assert engine.cursor == 0

    engine.submit(2)
    assert engine.cursor == 1
    assert engine.highlights == (False, False, True, False)

    # Level up once the feedback pulse ends, then the settle delay
    clock.advance(300)
    engine.update()
    assert engine.phase is Phase.GENERATING
    assert engine.score == 1
    assert engine.sound_controller.sounds_played == [GameSounds.LEVEL_UP]

    clock.advance(200)
    engine.update()
    assert engine.phase is Phase.PLAYING
    assert engine.sequence == (2, 0)

    run_until_phase(engine, clock, Phase.AWAITING_INPUT)
    assert engine.sound_controller.tones_played[-2:] == [(330.0, 290), (192.0, 290)]

    engine.submit(2)
    run_until(engine, clock, lambda: not any(engine.highlights))
    engine.submit(3)

    assert engine.phase is Phase.GAME_OVER
    assert len(score_sink.results) == 1
    result = score_sink.results[0]
    assert result.score == 1
    assert result.color == "red"
    assert result.playing_time_seconds == pytest.approx((clock.ms - start_ms) / 1000)

    engine.update()
    assert engine.phase is Phase.IDLE
    assert engine.score == 0
    assert engine.sequence == ()
    assert engine.sound_controller.sounds_played[-1] is GameSounds.GAME_OVER
    assert len(score_sink.results) == 1


def test_playback_timing_between_signals(make_engine, clock):
    engine = make_engine(script=[1, 3])
    engine.start("green")
    play_correct_round(engine, clock)
    run_until_phase(engine, clock, Phase.PLAYING)

    # First signal lit for 290ms, then a 50ms gap
    assert engine.highlights == (False, True, False, False)
    clock.advance(290)
    engine.update()
    assert engine.highlights == (False, False, False, False)
    assert engine.phase is Phase.PLAYING

    clock.advance(40)
    engine.update()
    assert engine.highlights == (False, False, False, False)

    clock.advance(10)
    engine.update()
    assert engine.highlights == (False, False, False, True)
    assert engine.cursor == 1


def test_playback_lasts_the_scheduled_duration(make_engine, clock):
    engine = make_engine(script=[1, 3])
    engine.start("green")
    play_correct_round(engine, clock)
    run_until_phase(engine, clock, Phase.PLAYING)
    started_ms = clock.ms

    run_until_phase(engine, clock, Phase.AWAITING_INPUT)

    assert clock.ms - started_ms == engine.playback.total_duration_ms(2, score=1) == 630


def test_submit_ignored_while_playing(make_engine, clock):
    engine = make_engine(script=[1])
    engine.start("blue")
    run_until_phase(engine, clock, Phase.PLAYING)

    engine.submit(1)
    engine.submit(0)

    assert engine.phase is Phase.PLAYING
    assert engine.cursor == 0
    assert engine.session.last_user_signal == "blue"


def test_submit_ignored_while_idle_and_generating(make_engine, score_sink):
    engine = make_engine()
    engine.submit(0)
    assert engine.phase is Phase.IDLE

    engine.start("red")
    engine.submit(0)
    assert engine.phase is Phase.GENERATING
    assert score_sink.results == []


@pytest.mark.parametrize("bad_index", [-1, 4, 17, True, "0", 1.0, None])
def test_invalid_submit_is_ignored(make_engine, clock, bad_index):
    engine = make_engine(script=[0])
    engine.start("green")
    run_until_phase(engine, clock, Phase.AWAITING_INPUT)

    engine.submit(bad_index)

    assert engine.phase is Phase.AWAITING_INPUT
    assert engine.cursor == 0


def test_submit_ignored_while_feedback_is_lit(make_engine, clock):
    engine = make_engine(script=[0, 0])
    engine.start("green")
    play_correct_round(engine, clock)
    run_until_phase(engine, clock, Phase.AWAITING_INPUT)

    engine.submit(0)
    engine.submit(0)
    assert engine.cursor == 1

    run_until(engine, clock, lambda: not any(engine.highlights))
    engine.submit(0)
    assert engine.cursor == 2


def test_double_start_is_ignored(make_engine, state_sink):
    engine = make_engine()
    engine.start("red")
    generation = engine.session.generation

    engine.start("blue")

    assert engine.session.chosen_color == "red"
    assert engine.session.generation == generation
    assert len(state_sink.snapshots) == 1


@pytest.mark.parametrize("rounds", [1, 3, 5])
def test_k_rounds_give_score_k(make_engine, clock, rounds):
    engine = make_engine(script=[0, 1, 2, 3, 1])
    engine.start("yellow")

    for completed in range(rounds):
        play_correct_round(engine, clock)
        assert engine.score == completed + 1

    assert engine.phase is Phase.GENERATING
    assert len(engine.sequence) == rounds

    run_until_phase(engine, clock, Phase.PLAYING)
    assert len(engine.sequence) == engine.score + 1


def test_game_over_resets_session(make_engine, clock, score_sink, state_sink):
    engine = make_engine(script=[2])
    engine.start("red")
    play_correct_round(engine, clock)
    play_correct_round(engine, clock)
    run_until_phase(engine, clock, Phase.AWAITING_INPUT)
    old_generation = engine.session.generation

    engine.submit(0)

    assert [r.score for r in score_sink.results] == [2]
    game_over_snapshot = state_sink.snapshots[-1]
    assert game_over_snapshot.game_over
    assert game_over_snapshot.score == 2
    assert game_over_snapshot.last_user_signal == "green"

    engine.update()

    assert engine.phase is Phase.IDLE
    assert engine.sequence == ()
    assert engine.score == 0
    assert not engine.is_playing
    assert engine.session.generation > old_generation
    assert state_sink.snapshots[-1].playing is False
    assert state_sink.snapshots[-1].game_over is False

    # Idle again: a new game can start
    engine.start("blue")
    assert engine.phase is Phase.GENERATING
    assert engine.session.chosen_color == "blue"


def test_game_over_waits_for_cue(make_engine, logger, clock):
    sounds = MockSoundController(logger, clock=clock, cue_durations_ms={GameSounds.GAME_OVER: 1500})
    engine = make_engine(script=[1], sound_controller=sounds)
    engine.start("red")
    run_until_phase(engine, clock, Phase.AWAITING_INPUT)

    engine.submit(0)
    clock.advance(1000)
    engine.update()
    assert engine.phase is Phase.GAME_OVER

    clock.advance(500)
    engine.update()
    assert engine.phase is Phase.IDLE


def test_level_up_cue_delays_next_round(make_engine, logger, clock):
    sounds = MockSoundController(logger, clock=clock, cue_durations_ms={GameSounds.LEVEL_UP: 800})
    engine = make_engine(script=[1], sound_controller=sounds)
    engine.start("red")
    run_until_phase(engine, clock, Phase.AWAITING_INPUT)

    engine.submit(1)
    clock.advance(300)
    engine.update()
    assert engine.phase is Phase.ROUND_COMPLETE
    assert engine.score == 1

    clock.advance(790)
    engine.update()
    assert engine.phase is Phase.ROUND_COMPLETE

    clock.advance(10)
    engine.update()
    assert engine.phase is Phase.GENERATING


def test_abort_discards_pending_playback_timers(make_engine, clock, score_sink):
    engine = make_engine(script=[3])
    engine.start("red")
    run_until_phase(engine, clock, Phase.PLAYING)
    assert engine.highlights == (False, False, False, True)

    engine.abort()
    assert engine.phase is Phase.IDLE
    assert engine.highlights == (False, False, False, False)
    assert engine.sequence == ()
    assert len(engine.timers) == 0

    engine.start("green")
    # The old "off" timer comes due here and must not move the new game on
    clock.advance(300)
    engine.update()

    assert engine.phase is Phase.PLAYING
    assert engine.sequence == (3,)
    assert engine.highlights == (False, False, False, True)
    assert score_sink.results == []


def test_abort_while_idle_does_nothing(make_engine, state_sink):
    engine = make_engine()
    generation = engine.session.generation

    engine.abort()

    assert engine.session.generation == generation
    assert state_sink.snapshots == []


def test_score_sink_failure_is_not_fatal(make_engine, clock):
    failing_sink = FailingScoreSink()
    engine = make_engine(script=[0], score_sink=failing_sink)
    engine.start("red")
    run_until_phase(engine, clock, Phase.AWAITING_INPUT)

    engine.submit(1)
    engine.update()

    assert failing_sink.calls == 1
    assert engine.phase is Phase.IDLE


def test_state_sink_failure_is_not_fatal(make_engine, clock):
    engine = make_engine(script=[0], state_sink=FailingStateSink())
    engine.start("red")
    play_correct_round(engine, clock)

    assert engine.score == 1


def test_engine_runs_without_sinks(make_engine, clock):
    engine = make_engine(script=[0], score_sink=None, state_sink=None)
    engine.start("red")
    run_until_phase(engine, clock, Phase.AWAITING_INPUT)
    engine.submit(2)
    engine.update()

    assert engine.phase is Phase.IDLE


def test_snapshots_follow_the_game(make_engine, clock, state_sink):
    engine = make_engine(script=[1])
    engine.start("yellow")

    first = state_sink.snapshots[0]
    assert first.playing
    assert first.chosen_color == "yellow"
    assert first.last_user_signal == "yellow"
    assert first.score == 0

    play_correct_round(engine, clock)

    assert any(s.last_user_signal == "red" and s.cursor == 1 for s in state_sink.snapshots)
    assert state_sink.snapshots[-1].score == 1
    assert engine.snapshot().as_dict()["score"] == 1


def test_signal_duration_reaches_floor(make_engine, clock):
    engine = make_engine(script=[0, 1, 2, 3])
    engine.start("red")

    for _ in range(21):
        play_correct_round(engine, clock)
    run_until_phase(engine, clock, Phase.AWAITING_INPUT)

    durations = {duration for _, duration in engine.sound_controller.tones_played[-22:]}
    assert engine.score == 21
    assert durations == {100}


def test_custom_timing(make_engine, clock):
    config = GameConfig(timing=TimingConfig(max_signal_duration_ms=500, startup_delay_ms=1000))
    engine = make_engine(script=[0], config=config)
    engine.start("green")

    clock.advance(990)
    engine.update()
    assert engine.phase is Phase.GENERATING

    clock.advance(10)
    engine.update()
    assert engine.phase is Phase.PLAYING
    assert engine.sound_controller.tones_played == [(192.0, 500)]


def test_describe_sequence(make_engine, clock):
    engine = make_engine(script=[3, 0])
    engine.start("red")
    play_correct_round(engine, clock)
    run_until_phase(engine, clock, Phase.PLAYING)

    assert engine.describe_sequence() == "blue green"
