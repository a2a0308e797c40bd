"""JSON API routes."""
import logging
import math
from typing import Any, Callable, Dict, List

from flask import Blueprint, current_app, g, jsonify, request
from sqlalchemy.orm import Session

from spellcat import monitoring
from spellcat.config import Settings
from spellcat.formatting import format_datetime, format_duration
from spellcat.models.spelling_models import HomophoneAttempt, MasteryStatus, SpellingAttempt
from spellcat.services import mastery
from spellcat.services.homophone_service import HomophoneService
from spellcat.services.progress_service import ProgressService
from spellcat.services.quest_service import QuestService
from spellcat.services.session_service import SessionService
from spellcat.services.spelling_differ import diff_spelling
from spellcat.services.word_service import WordService

logger = logging.getLogger(__name__)

api = Blueprint("api", __name__, url_prefix="/api")

# Words listed alongside the progress summary
PROGRESS_REVIEW_PREVIEW = 10


def get_session() -> Session:
    """Database session for the current request, opened on first use."""
    if "db" not in g:
        g.db = current_app.extensions["spellcat"]["session_factory"]()
    return g.db


def get_settings() -> Settings:
    return current_app.extensions["spellcat"]["settings"]


def success_response(data: Any) -> Any:
    return jsonify({"success": True, "data": data})


def error_response(message: str, status: int) -> Any:
    return jsonify({"success": False, "error": message}), status


def json_body() -> Dict[str, Any]:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return body


def _duration(value: Any) -> Any:
    """Accept positive second counts; anything else means 'not provided'."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) \
            or not math.isfinite(value) or value <= 0:
        return None
    return int(round(value))


@api.route("/words", methods=["GET"])
def next_word() -> Any:
    """Next word to practise."""
    service = WordService(get_session(), get_settings().learning)
    try:
        word = service.get_random_word()
    except LookupError:
        return error_response("No words available for practice", 404)
    return success_response(word.to_dict())


@api.route("/words", methods=["POST"])
def record_word_attempt() -> Any:
    """Record a single answer for a word."""
    body = json_body()
    word = body.get("word")
    user_spelling = body.get("userSpelling")
    is_correct = body.get("isCorrect")

    if not word or not isinstance(word, str) or not isinstance(user_spelling, str) \
            or not isinstance(is_correct, bool):
        return error_response("Missing required fields: word, userSpelling, isCorrect", 400)

    service = WordService(get_session(), get_settings().learning)
    stats = service.update_word_stats(word, is_correct)

    data = {
        "word": word,
        "userSpelling": user_spelling,
        "isCorrect": is_correct,
        "message": "Correct!" if is_correct else "Try again!",
        "stats": stats.to_dict(),
    }
    if not is_correct:
        data["comparison"] = diff_spelling(word, user_spelling).to_dict()
    return success_response(data)


@api.route("/words/stats", methods=["GET"])
def word_stats() -> Any:
    """All words with their stats, optionally filtered by mastery status."""
    status_param = request.args.get("status")
    status = None
    if status_param:
        try:
            status = MasteryStatus(status_param)
        except ValueError:
            allowed = ", ".join(s.value for s in MasteryStatus)
            return error_response(f"Unknown status {status_param!r}; expected one of: {allowed}", 400)

    service = WordService(get_session(), get_settings().learning)
    return success_response([item.to_dict() for item in service.get_words_with_stats(status)])


@api.route("/compare", methods=["POST"])
def compare_spelling() -> Any:
    """Character-level comparison of an expected word and a typed spelling."""
    body = json_body()
    comparison = diff_spelling(body.get("expected"), body.get("actual"))
    monitoring.comparisons.inc()
    return success_response(comparison.to_dict())


def parse_attempts(
    body: Dict[str, Any], parse: Callable[[Dict[str, Any]], Any], fields: str
) -> List[Any]:
    """Parse the non-empty attempts array of a session payload."""
    raw_attempts = body.get("attempts")
    if not isinstance(raw_attempts, list) or not raw_attempts:
        raise ValueError("Attempts array is required and must not be empty")
    try:
        return [parse(item) for item in raw_attempts]
    except ValueError:
        raise ValueError(f"Each attempt must have {fields} fields") from None


@api.route("/sessions", methods=["POST"])
def create_session() -> Any:
    """Save a finished practice session."""
    body = json_body()
    attempts = parse_attempts(body, SpellingAttempt.from_dict, "word, userSpelling, and isCorrect")

    service = SessionService(get_session(), get_settings().learning)
    try:
        result = service.create_session(attempts, duration=_duration(body.get("duration")))
    except LookupError as e:
        return error_response(str(e.args[0]), 400)
    return success_response(result.to_dict())


@api.route("/sessions", methods=["GET"])
def get_session_result() -> Any:
    """Fetch one saved session by id."""
    session_id = request.args.get("sessionId")
    if not session_id:
        return error_response("Session ID is required", 400)

    result = SessionService(get_session(), get_settings().learning).get_session(session_id)
    if result is None:
        return error_response("Session not found", 404)
    return success_response(result.to_dict())


@api.route("/sessions/<session_id>/duration", methods=["PUT"])
def set_session_duration(session_id: str) -> Any:
    body = json_body()
    duration = body.get("duration")
    if isinstance(duration, bool) or not isinstance(duration, int):
        return error_response("Duration must be a whole number of seconds", 400)

    service = SessionService(get_session(), get_settings().learning)
    if not service.update_session_duration(session_id, duration):
        return error_response("Session not found", 404)
    return success_response({"sessionId": session_id, "duration": duration})


@api.route("/sessions/recent", methods=["GET"])
def recent_sessions() -> Any:
    """Session history, newest first."""
    limit = request.args.get("limit", type=int)
    if limit is not None and limit < 1:
        return error_response("limit must be positive", 400)

    sessions = SessionService(get_session(), get_settings().learning).get_recent_sessions(limit)
    return success_response([
        {
            "sessionId": session.id,
            "date": session.date.isoformat(),
            "formattedDate": format_datetime(session.date),
            "score": int(session.score),
            "totalWords": session.words_attempted,
            "correctWords": session.correct_words,
            "duration": session.duration,
            "formattedDuration": format_duration(session.duration),
            "celebrationLevel": mastery.celebration_level(session.score).value,
            "sessionType": session.session_type,
            "chapter": session.chapter,
        }
        for session in sessions
    ])


@api.route("/progress", methods=["GET"])
def progress() -> Any:
    """Progress summary plus the words most overdue for review."""
    db = get_session()
    learning = get_settings().learning
    stats = ProgressService(db, learning).get_progress_stats()
    review_words = WordService(db, learning).get_words_needing_review()
    return success_response({
        "stats": stats.to_dict(),
        "wordsNeedingReview": [w.to_dict() for w in review_words[:PROGRESS_REVIEW_PREVIEW]],
    })


@api.route("/mastery", methods=["GET"])
def mastery_summary() -> Any:
    """Distribution of words over mastery levels, with level labels."""
    learning = get_settings().learning
    levels = WordService(get_session(), learning).get_mastery_levels()
    summary = mastery.mastery_progress(levels).to_dict()
    summary["levels"] = [
        {
            "level": info.level,
            "label": info.label,
            "color": info.color,
            "nextReviewDays": info.next_review_days,
        }
        for info in map(mastery.mastery_level_info, range(learning.max_mastery_level + 1))
    ]
    return success_response(summary)


@api.route("/quests", methods=["GET"])
def quest_progress() -> Any:
    """Current chapter, completed chapters and cached chapter word sets."""
    service = QuestService(get_session(), get_settings().learning)
    return success_response(service.progress_to_dict(service.get_progress()))


@api.route("/quests/reset", methods=["POST"])
def reset_quests() -> Any:
    service = QuestService(get_session(), get_settings().learning)
    return success_response(service.progress_to_dict(service.reset_progress()))


@api.route("/quests/<int:chapter>/words", methods=["GET"])
def quest_chapter_words(chapter: int) -> Any:
    """Words for a chapter, chosen on first request."""
    service = QuestService(get_session(), get_settings().learning)
    words = service.get_chapter_words(chapter)
    return success_response({"chapter": chapter, "words": words})


@api.route("/quests/<int:chapter>/complete", methods=["POST"])
def complete_quest_chapter(chapter: int) -> Any:
    service = QuestService(get_session(), get_settings().learning)
    return success_response(service.progress_to_dict(service.mark_chapter_complete(chapter)))


@api.route("/quests/<int:chapter>/sessions", methods=["POST"])
def create_quest_session(chapter: int) -> Any:
    """Save a finished quest chapter."""
    body = json_body()
    attempts = parse_attempts(body, SpellingAttempt.from_dict, "word, userSpelling, and isCorrect")

    service = QuestService(get_session(), get_settings().learning)
    try:
        result = service.create_quest_session(
            chapter, attempts, duration=_duration(body.get("duration"))
        )
    except LookupError as e:
        return error_response(str(e.args[0]), 400)
    return success_response(result.to_dict())


@api.route("/homophones", methods=["GET"])
def homophone_challenge() -> Any:
    """A random homophone challenge for a year level."""
    year_level = request.args.get("yearLevel", type=int)
    service = HomophoneService(get_session(), get_settings().learning)
    try:
        challenge = service.get_random_challenge(year_level)
    except LookupError as e:
        return error_response(str(e.args[0]), 404)
    return success_response(challenge.to_dict())


@api.route("/homophones/sessions", methods=["POST"])
def create_homophones_session() -> Any:
    """Save a finished homophones game."""
    body = json_body()
    attempts = parse_attempts(
        body,
        HomophoneAttempt.from_dict,
        "word, selectedHomophone, correctHomophone, contextSentence, and isCorrect",
    )

    service = HomophoneService(get_session(), get_settings().learning)
    try:
        result = service.create_session(attempts, duration=_duration(body.get("duration")))
    except LookupError as e:
        return error_response(str(e.args[0]), 400)
    return success_response(result.to_dict())


@api.route("/homophones/sessions", methods=["GET"])
def get_homophones_session() -> Any:
    session_id = request.args.get("sessionId")
    if not session_id:
        return error_response("Session ID is required", 400)

    result = HomophoneService(get_session(), get_settings().learning).get_session(session_id)
    if result is None:
        return error_response("Session not found", 404)
    return success_response(result.to_dict())
