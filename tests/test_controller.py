import pytest

from animation.controller import PlaybackState, StepController
from walkthrough.parameters import PlaybackConfig


def snapshot(c):
    return (c.active_step, c.is_playing, c.attention_phase)


def test_initial_state():
    c = StepController()
    assert c.state == PlaybackState(0, False, 0)
    assert c.current_step.name == "Input Tokenization"


@pytest.mark.parametrize("target, expected", [(-1, 0), (-100, 0), (8, 7), (1000, 7)])
def test_go_to_clamps_out_of_range(target, expected):
    c = StepController()
    c.play()
    c.go_to(target)
    assert c.active_step == expected
    assert not c.is_playing


def test_go_to_truncates_floats_and_rejects_non_numbers():
    c = StepController()
    c.go_to(3.7)
    assert c.active_step == 3
    with pytest.raises(TypeError):
        c.go_to("3")


@pytest.mark.parametrize("initial", [
    PlaybackState(0, False, 0),
    PlaybackState(3, True, 2),
    PlaybackState(7, False, 0),
    PlaybackState(5, True, 0),
])
def test_reset_always_returns_to_start(initial):
    c = StepController(initial_state=initial)
    c.reset()
    assert c.state == PlaybackState(0, False, 0)


def test_reset_cancels_autoplay():
    c = StepController()
    c.play()
    c.update(3.0)
    c.reset()
    c.update(10.0)
    assert snapshot(c) == (0, False, 0)


def test_one_tick_per_step_duration():
    c = StepController()
    c.play()
    c.update(3.5)
    assert c.active_step == 0
    c.update(0.5)
    assert c.active_step == 1
    c.update(3.5)
    assert c.active_step == 1
    c.update(0.5)
    assert c.active_step == 2
    assert c.is_playing


def test_autoplay_stops_at_terminal_step():
    c = StepController()
    c.play()
    for expected in range(1, 8):
        c.update(4.0)
        assert c.active_step == expected
    assert not c.is_playing
    c.update(20.0)
    assert snapshot(c) == (7, False, 0)


def test_large_update_runs_whole_walkthrough():
    c = StepController()
    c.play()
    c.update(100.0)
    assert snapshot(c) == (7, False, 0)


def test_tick_past_terminal_stops_and_is_idempotent():
    c = StepController(initial_state=PlaybackState(7, True, 0))
    c.tick()
    assert snapshot(c) == (7, False, 0)
    c.tick()
    assert snapshot(c) == (7, False, 0)


def test_tick_while_paused_is_noop():
    c = StepController()
    c.tick()
    assert snapshot(c) == (0, False, 0)


def test_play_at_terminal_step_is_noop():
    c = StepController()
    c.go_to(7)
    c.play()
    assert not c.is_playing


def test_terminal_playing_state_is_stopped_after_one_update():
    c = StepController(initial_state=PlaybackState(7, True, 2))
    c.update(0.0)
    assert not c.is_playing
    assert c.active_step == 7


def test_toggle():
    c = StepController()
    c.toggle()
    assert c.is_playing
    c.toggle()
    assert not c.is_playing


def test_pause_restarts_dwell_on_resume():
    c = StepController()
    c.play()
    c.update(3.0)
    c.pause()
    c.update(10.0)
    assert c.active_step == 0
    c.play()
    c.update(3.0)
    assert c.active_step == 0
    c.update(1.0)
    assert c.active_step == 1


def test_go_to_while_playing_cancels_autoplay():
    c = StepController()
    c.play()
    c.update(2.0)
    c.go_to(5)
    assert not c.is_playing
    c.update(10.0)
    assert c.active_step == 5


def test_walkthrough_scenario():
    c = StepController()
    assert snapshot(c) == (0, False, 0)
    c.play()
    assert snapshot(c) == (0, True, 0)
    c.update(4.0)
    assert snapshot(c) == (1, True, 0)
    c.go_to(3)
    assert snapshot(c) == (3, False, 0)
    c.play()
    c.update(0.75)
    assert snapshot(c) == (3, True, 1)


def test_attention_phase_cycles_while_playing_on_attention_step():
    c = StepController()
    c.go_to(3)
    c.play()
    phases = []
    for _ in range(5):
        c.update(0.75)
        phases.append(c.attention_phase)
    assert phases == [1, 2, 3, 0, 1]
    assert c.active_step == 3


def test_attention_tick_is_noop_elsewhere():
    c = StepController()
    c.attention_tick()
    assert c.attention_phase == 0
    c.go_to(2)
    c.play()
    c.attention_tick()
    assert c.attention_phase == 0
    c.go_to(3)
    c.attention_tick()  # paused
    assert c.attention_phase == 0


def test_attention_phase_freezes_on_pause():
    c = StepController()
    c.go_to(3)
    c.play()
    c.update(0.75)
    c.pause()
    c.update(3.0)
    assert snapshot(c) == (3, False, 1)


def test_attention_phase_resets_when_leaving_step():
    c = StepController()
    c.go_to(3)
    c.play()
    c.update(2.25)
    assert c.attention_phase == 3
    c.update(1.75)
    assert snapshot(c) == (4, True, 0)
    c.update(0.75)
    assert c.attention_phase == 0


def test_reentering_attention_step_starts_phase_at_zero():
    c = StepController()
    c.go_to(3)
    c.play()
    c.update(1.5)
    assert c.attention_phase == 2
    c.go_to(4)
    c.go_to(3)
    assert c.attention_phase == 0


def test_subscribers_see_every_change():
    c = StepController()
    seen = []
    unsubscribe = c.subscribe(seen.append)
    c.play()
    c.update(4.0)
    assert seen == [PlaybackState(0, True, 0), PlaybackState(1, True, 0)]
    unsubscribe()
    c.pause()
    assert len(seen) == 2


def test_no_notification_without_change():
    c = StepController()
    seen = []
    c.subscribe(seen.append)
    c.pause()
    c.update(1.0)
    assert seen == []


def test_section_notification_is_delayed():
    c = StepController()
    sections = []
    c.on_section(sections.append)
    c.go_to(5)
    c.update(0.05)
    assert sections == []
    c.update(0.05)
    assert sections == ['feedforward']


def test_section_notification_is_debounced():
    c = StepController()
    sections = []
    c.on_section(sections.append)
    c.go_to(1)
    c.update(0.05)
    c.go_to(2)
    c.update(0.5)
    assert sections == ['positional']


def test_section_notification_per_step_during_autoplay():
    c = StepController()
    sections = []
    c.on_section(sections.append)
    c.play()
    c.update(40.0)
    assert sections == ['embeddings', 'positional', 'attention', 'attention',
                        'feedforward', 'feedforward', 'output']


def test_step_elapsed_tracks_time_on_step():
    c = StepController()
    c.play()
    c.update(4.0)
    c.update(1.5)
    assert c.step_elapsed == pytest.approx(1.5)


def test_custom_timing():
    c = StepController(PlaybackConfig(step_duration=1.0, attention_phase_interval=0.25))
    c.go_to(2)
    c.play()
    c.update(1.0)
    assert c.active_step == 3
    c.update(0.5)
    assert c.attention_phase == 2


@pytest.mark.parametrize("initial, expected", [
    (PlaybackState(12, False, 0), PlaybackState(7, False, 0)),
    (PlaybackState(-2, True, 0), PlaybackState(0, True, 0)),
    (PlaybackState(5, False, 2), PlaybackState(5, False, 0)),
    (PlaybackState(3, True, 6), PlaybackState(3, True, 2)),
])
def test_initial_state_is_normalized(initial, expected):
    c = StepController(initial_state=initial)
    assert c.state == expected
    assert c.current_step.id == expected.active_step


def test_failing_subscriber_does_not_drop_section_notification():
    c = StepController()
    sections = []
    c.on_section(sections.append)

    def broken(state):
        raise RuntimeError("listener failed")

    c.subscribe(broken)
    with pytest.raises(RuntimeError):
        c.go_to(3)
    assert c.active_step == 3
    c.update(0.1)
    assert sections == ['attention']


def test_unsubscribe_is_idempotent():
    c = StepController()
    seen, sections = [], []
    unsubscribe = c.subscribe(seen.append)
    unsubscribe_section = c.on_section(sections.append)
    unsubscribe()
    unsubscribe()
    unsubscribe_section()
    unsubscribe_section()
    c.go_to(2)
    c.update(1.0)
    assert seen == []
    assert sections == []
