"""Tests for cooking mode navigation, speech and voice commands."""

import pytest

from recipeai.services.cooking_mode import (
    COMPLETED_MESSAGE,
    CookingSession,
    VoiceCommand,
    parse_voice_command,
)
from recipeai.utils.exceptions import DevicePermissionError

STEPS = ["Chop the onion.", "Fry the onion.", "Serve."]
VOICE = ["First, chop the onion.", "Now fry it.", ""]


class FakeSpeech:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.spoken = []
        self.cancelled = 0

    def speak(self, text):
        if self.fail:
            raise DevicePermissionError("speech synthesis blocked")
        self.spoken.append(text)

    def cancel(self):
        self.cancelled += 1


class FakeRecognizer:
    def __init__(self, transcript=None, error=None):
        self.transcript = transcript
        self.error = error

    def listen(self):
        if self.error:
            raise self.error
        return self.transcript


@pytest.mark.parametrize(
    "transcript, command",
    [
        ("Next step please", VoiceCommand.NEXT),
        ("go forward", VoiceCommand.NEXT),
        ("PREVIOUS", VoiceCommand.PREVIOUS),
        ("go back", VoiceCommand.PREVIOUS),
        ("say that again", VoiceCommand.REPEAT),
        ("repeat", VoiceCommand.REPEAT),
        ("quit", VoiceCommand.EXIT),
        ("close cooking mode", VoiceCommand.EXIT),
        ("what's the weather", VoiceCommand.UNKNOWN),
        ("", VoiceCommand.UNKNOWN),
    ],
)
def test_parse_voice_command(transcript, command):
    assert parse_voice_command(transcript) is command


def test_next_speaks_voice_instruction_and_cancels_prior():
    speech = FakeSpeech()
    session = CookingSession(STEPS, VOICE, speech=speech)

    session.next_step()
    session.next_step()

    assert session.current_step == 2
    # empty voice instruction falls back to the written step
    assert speech.spoken == ["Now fry it.", "Serve."]
    assert speech.cancelled == 1
    assert session.progress == 100


def test_next_at_last_step_completes():
    session = CookingSession(STEPS, current_step=2)
    session.next_step()
    assert session.current_step == 2
    assert session.completed
    assert session.notifier.items[0].message == COMPLETED_MESSAGE


def test_previous_is_noop_at_first_step():
    speech = FakeSpeech()
    session = CookingSession(STEPS, speech=speech)
    session.previous_step()
    assert session.current_step == 0
    assert speech.spoken == []


def test_progress():
    assert CookingSession(STEPS, current_step=1).progress == 50
    assert CookingSession(["Only step"]).progress == 100


def test_toggle_voice():
    speech = FakeSpeech()
    session = CookingSession(STEPS, VOICE, speech=speech)

    session.toggle_voice()
    assert session.is_speaking
    assert speech.spoken == ["First, chop the onion."]

    session.toggle_voice()
    assert not session.is_speaking
    assert speech.cancelled == 1


def test_repeat_while_speaking_restarts_instruction():
    speech = FakeSpeech()
    session = CookingSession(STEPS, VOICE, speech=speech)
    session.repeat()

    assert session.handle_command("say that again") is VoiceCommand.REPEAT
    assert session.is_speaking
    assert speech.spoken == ["First, chop the onion.", "First, chop the onion."]
    assert speech.cancelled == 1


def test_speech_failure_notifies():
    session = CookingSession(STEPS, speech=FakeSpeech(fail=True))
    session.repeat()
    assert not session.is_speaking
    assert session.notifier.items[0].message == "Failed to speak instruction"


def test_exit_command_stops_session():
    speech = FakeSpeech()
    session = CookingSession(STEPS, speech=speech)
    session.repeat()

    assert session.handle_command("exit") is VoiceCommand.EXIT
    assert not session.active
    assert speech.cancelled == 1


def test_unknown_command_notifies():
    session = CookingSession(STEPS)
    assert session.handle_command("Banana") is VoiceCommand.UNKNOWN
    assert session.notifier.items[0].message == 'Command not recognized: "banana"'


def test_listen_applies_heard_command():
    session = CookingSession(STEPS)
    assert session.listen(FakeRecognizer("next")) is VoiceCommand.NEXT
    assert session.current_step == 1
    assert session.notifier.items[0].message == "Listening for voice commands..."


def test_listen_without_recognizer_aborts():
    session = CookingSession(STEPS)
    assert session.listen(None) is None
    assert session.notifier.items[0].level == "error"


def test_listen_permission_denied_aborts():
    session = CookingSession(STEPS)
    result = session.listen(FakeRecognizer(error=DevicePermissionError("microphone denied")))
    assert result is None
    assert session.current_step == 0
    assert session.notifier.items[-1].message == "Error recognizing voice command"


def test_state_snapshot():
    state = CookingSession(STEPS, VOICE, current_step=1).state()
    assert state.currentStep == 1
    assert state.totalSteps == 3
    assert state.progress == 50
    assert state.instruction == "Now fry it."
