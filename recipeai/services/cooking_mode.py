"""
Hands-free cooking mode: step navigation, speech and voice commands.

Speech output and recognition are device facilities owned by the client. The
session only talks to them through the TextToSpeech and SpeechRecognizer
ports, so the navigation logic runs (and is tested) without any device.
"""

from __future__ import annotations

import enum
import logging
from typing import List, Optional, Protocol

from pydantic import BaseModel

from recipeai.models.notification import Notifier
from recipeai.utils.exceptions import DevicePermissionError

logger = logging.getLogger(__name__)

COMPLETED_MESSAGE = "Recipe completed! Enjoy your meal!"


class TextToSpeech(Protocol):
    def speak(self, text: str) -> None: ...

    def cancel(self) -> None: ...


class SpeechRecognizer(Protocol):
    def listen(self) -> str:
        """Block until one utterance is heard and return its transcript."""
        ...


class VoiceCommand(str, enum.Enum):
    NEXT = "next"
    PREVIOUS = "previous"
    REPEAT = "repeat"
    EXIT = "exit"
    UNKNOWN = "unknown"


_COMMAND_WORDS = (
    (VoiceCommand.NEXT, ("next", "forward")),
    (VoiceCommand.PREVIOUS, ("previous", "back")),
    (VoiceCommand.REPEAT, ("repeat", "again")),
    (VoiceCommand.EXIT, ("exit", "quit", "close")),
)


def parse_voice_command(transcript: str) -> VoiceCommand:
    """Map a spoken phrase to a command by keyword, checked in a fixed order."""
    phrase = (transcript or "").lower()
    for command, words in _COMMAND_WORDS:
        if any(word in phrase for word in words):
            return command
    return VoiceCommand.UNKNOWN


class CookingState(BaseModel):
    """Snapshot of a cooking session."""

    currentStep: int
    totalSteps: int
    progress: float
    completed: bool
    active: bool
    isSpeaking: bool
    instruction: str


class CookingSession:
    """Step-by-step walk through a recipe, optionally narrated."""

    def __init__(
        self,
        steps: List[str],
        voice_instructions: Optional[List[str]] = None,
        *,
        speech: Optional[TextToSpeech] = None,
        notifier: Optional[Notifier] = None,
        current_step: int = 0,
    ):
        self.steps = list(steps)
        self.voice_instructions = list(voice_instructions or [])
        self.speech = speech
        self.notifier = notifier or Notifier()
        self.current_step = max(0, min(current_step, len(self.steps) - 1)) if self.steps else 0
        self.is_speaking = False
        self.completed = False
        self.active = True

    @property
    def progress(self) -> float:
        if len(self.steps) <= 1:
            return 100.0 if self.steps else 0.0
        return self.current_step / (len(self.steps) - 1) * 100

    def instruction_at(self, index: int) -> str:
        """Voice instruction for a step, falling back to the written step."""
        if index < len(self.voice_instructions) and self.voice_instructions[index]:
            return self.voice_instructions[index]
        return self.steps[index] if index < len(self.steps) else ""

    # ------------------------------------------------------------------
    # Speech
    # ------------------------------------------------------------------

    def speak(self, text: str) -> None:
        """Speak ``text``, cancelling whatever is still being said."""
        if self.speech is None or not text:
            return
        try:
            if self.is_speaking:
                self.speech.cancel()
            self.speech.speak(text)
            self.is_speaking = True
        except DevicePermissionError as e:
            logger.warning(f"Speech synthesis failed: {str(e)}")
            self.is_speaking = False
            self.notifier.error("Failed to speak instruction")

    def speech_finished(self) -> None:
        """Called by the speech port when an utterance ends."""
        self.is_speaking = False

    def toggle_voice(self) -> None:
        if self.is_speaking:
            if self.speech is not None:
                self.speech.cancel()
            self.is_speaking = False
        else:
            self.speak(self.instruction_at(self.current_step))

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def next_step(self) -> None:
        if self.current_step < len(self.steps) - 1:
            self.current_step += 1
            self.speak(self.instruction_at(self.current_step))
        else:
            self.completed = True
            self.notifier.success(COMPLETED_MESSAGE)

    def previous_step(self) -> None:
        if self.current_step > 0:
            self.current_step -= 1
            self.speak(self.instruction_at(self.current_step))

    def repeat(self) -> None:
        self.speak(self.instruction_at(self.current_step))

    def exit(self) -> None:
        if self.is_speaking and self.speech is not None:
            self.speech.cancel()
        self.is_speaking = False
        self.active = False

    # ------------------------------------------------------------------
    # Voice commands
    # ------------------------------------------------------------------

    def handle_command(self, transcript: str) -> VoiceCommand:
        """Apply a spoken command to the session."""
        command = parse_voice_command(transcript)
        logger.info("Voice command: %r -> %s", transcript, command.value)

        if command is VoiceCommand.NEXT:
            self.next_step()
        elif command is VoiceCommand.PREVIOUS:
            self.previous_step()
        elif command is VoiceCommand.REPEAT:
            self.repeat()
        elif command is VoiceCommand.EXIT:
            self.exit()
        else:
            self.notifier.info(f'Command not recognized: "{(transcript or "").lower()}"')
        return command

    def listen(self, recognizer: Optional[SpeechRecognizer]) -> Optional[VoiceCommand]:
        """Hear one command through the recognizer and apply it. None if listening failed."""
        if recognizer is None:
            self.notifier.error("Voice recognition is not supported in your browser")
            return None

        self.notifier.info("Listening for voice commands...")
        try:
            transcript = recognizer.listen()
        except DevicePermissionError as e:
            logger.warning(f"Speech recognition failed: {str(e)}")
            self.notifier.error("Error recognizing voice command")
            return None
        return self.handle_command(transcript)

    def state(self) -> CookingState:
        return CookingState(
            currentStep=self.current_step,
            totalSteps=len(self.steps),
            progress=round(self.progress, 2),
            completed=self.completed,
            active=self.active,
            isSpeaking=self.is_speaking,
            instruction=self.instruction_at(self.current_step),
        )
