"""
Fixed copy used by the formatters and the session flow.
"""

from enum import Enum


class BranchAction(Enum):
    """Choices offered under a coaching reply. Values are the action ids."""

    DIG_DEEPER = "dig_deeper_yes"
    DONE = "dig_deeper_no"

    @classmethod
    def from_action_id(cls, action_id: str) -> "BranchAction":
        return cls(action_id)


# Intake form
INTAKE_CALLBACK_ID = "maven_topic_modal"
TOPIC_BLOCK_ID = "topic_block"
QUESTION_BLOCK_ID = "question_block"

INTAKE_TITLE = "Maven ⚡"
INTAKE_SUBMIT = "Get Coached →"
INTAKE_CLOSE = "Not now"
INTAKE_WELCOME = (
    "*Welcome, Manager.* 👋\n\n"
    "Maven is your on-the-go coaching toolkit — built for the moments when you need a thought "
    "partner *right now.*\n\n"
    "_Select a topic and describe your situation. The more specific you are, the better the "
    "coaching._"
)
TOPIC_LABEL = "📌 What's on your mind today?"
TOPIC_PLACEHOLDER = "Choose a coaching topic..."
QUESTION_LABEL = "✏️ Describe your specific situation"
QUESTION_HINT = "What's actually happening? Who's involved? What outcome do you want?"
QUESTION_PLACEHOLDER = (
    "e.g. 'I need to address declining work quality with a team member who's been going through "
    "personal issues. I've been avoiding it for two weeks...'"
)

# Coaching reply
WHY_LABEL = "*⚡ Why This Matters*"
TIPS_LABEL = "*🎯 3 Tips You Can Use Right Now*"
COACHING_LABEL = "*🧠 Coaching for Your Situation*"
OPT_IN_TEXT = (
    "*Want to go deeper?* 👇\n"
    "There's more — a richer exploration, 3 big ideas, and a prompt to keep this going on your "
    "own terms."
)
DIG_DEEPER_BUTTON = "📖 Yes, dig deeper"
DONE_BUTTON = "✓ I'm good, thanks"

# Deep dive
BIG_IDEAS_LABEL = "*💡 3 Big Ideas to Take With You*"
KEEP_GOING_TEXT = (
    "*🚀 Keep the Conversation Going*\n\n"
    "Ready to go further? Here's exactly what to type next:\n\n"
    "> {prompt}"
)
DEEP_DIVE_FOOTER = (
    "_Maven — Your Leadership Code coaching partner. Built on the belief that great managers are "
    "made, not born._"
)

# Closing
CLOSING_TEXT = (
    "✅ *You're set!* Come back to Maven anytime — great managers keep coming back to the "
    "fundamentals.\n\n"
    "Type `/maven` to start a new session."
)
CLOSING_FOOTER = "_Maven — Your Leadership Code coaching partner._"

# Standalone guide
GUIDE_HEADER = "Maven 1-Pager: {label}"
GUIDE_FOOTER = (
    "_Maven — Leadership Code Coaching Guide | To save: copy this message or pin it in the chat_"
)
GUIDE_HELP_TITLE = "*📄 Maven 1-Pager Generator*"
GUIDE_HELP_USAGE = "Type `/maven_guide [topic]` to generate a coaching guide."
GUIDE_PENDING = "⏳ Generating your Maven 1-pager on *{label}*..."
GUIDE_NOT_FOUND = 'Topic "{slug}" not found. Try: {choices}'
GUIDE_FAILED = "Something went wrong generating your guide. Try again!"

# Session flow
DEFAULT_DISPLAY_NAME = "Manager"
COACHING_FAILED = "Something went wrong with Maven. Please try `/maven` again in a moment."
