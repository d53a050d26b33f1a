"""
Coaching topic catalog.

Static content loaded once at import. Text uses chat markup: ``*bold*`` and
``_italic_``; the platform renderer converts it.
"""

from .models import Topic

TOPICS = (
    Topic(
        id="hard_conversations",
        label="💬 Hard Conversations",
        emoji="💬",
        why=(
            "Hard conversations are where great managers are made. Avoiding them doesn't make "
            "problems disappear — it compounds them. Every day you delay, you're choosing your own "
            "comfort over your team's growth. The Leadership Code calls this *leading with courage* "
            "— and it's one of the most transformative skills you can build."
        ),
        tips=(
            "*Prepare, don't script.* Know your key point and desired outcome. Clarity beats a "
            "memorized script every time.",
            "*Lead with curiosity, not conclusions.* Start with 'I've noticed X — help me understand "
            "what's going on' instead of delivering a verdict.",
            "*Name the discomfort.* It's okay to say 'This is a hard conversation for me too.' "
            "Naming it reduces tension and builds immediate trust.",
        ),
        deep_dive_intro=(
            "Hard conversations aren't just about delivering bad news — they're about *creating "
            "shared reality*. Most managers avoid them fearing they'll damage the relationship. But "
            "the relationship suffers most when hard things go unsaid. Silence is not safety."
        ),
        big_ideas=(
            "*Clarity is kindness.* Vague feedback is not compassion — it's avoidance dressed up as "
            "niceness.",
            "*Your discomfort is data, not a stop sign.* The urge to soften or hedge? That's the "
            "moment to lean in.",
            "*The conversation you avoid has already started.* Your team can feel when something is "
            "off. The silence is louder than you think.",
        ),
        dig_deeper_prompt=(
            '/maven → select "Hard Conversations" → type: "Coach me through a specific conversation '
            'I need to have with [describe the person and situation]"'
        ),
    ),
    Topic(
        id="better_11s",
        label="🎯 Better 1:1s",
        emoji="🎯",
        why=(
            "1:1s are the single highest-leverage activity in a manager's week. Done well, they "
            "build trust, surface problems early, and accelerate growth. The Leadership Code "
            "principle of *growing your people* starts here — in this recurring 30-60 minutes you "
            "have with each person."
        ),
        tips=(
            "*Make it their meeting.* The agenda belongs to your direct report. You're there to "
            "listen, coach, and unblock — not run a status update.",
            "*Ask questions that go deeper.* Try: 'What's energizing you?' or 'What's getting in "
            "your way this week?'",
            "*End with one commitment.* Ask 'What's the one thing I can do before our next 1:1?' — "
            "then actually do it.",
        ),
        deep_dive_intro=(
            "Most 1:1s fail because managers default to *status updates* instead of *connection and "
            "coaching*. The shift from tactical to developmental conversations is what separates "
            "managers who retain great people from those who wonder why their team keeps leaving."
        ),
        big_ideas=(
            "*Presence > Agenda.* The most important thing you bring is your full attention. Close "
            "the laptop.",
            "*Patterns matter more than single sessions.* What your people return to repeatedly — "
            "those are their real development needs.",
            "*Psychological safety is built in 1:1s.* How you respond when someone shares a "
            "struggle determines whether they'll share the next one.",
        ),
        dig_deeper_prompt=(
            '/maven → select "Better 1:1s" → type: "Help me redesign my 1:1 approach with '
            '[name/role] — here\'s the current dynamic: [describe]"'
        ),
    ),
    Topic(
        id="performance_issues",
        label="📉 Performance Issues",
        emoji="📉",
        why=(
            "When performance issues go unaddressed, they don't just affect one person — they erode "
            "team trust and lower the bar for everyone. The Leadership Code is clear: *building "
            "trust* means being fair and consistent, and *growing your people* means not giving up "
            "when things get hard."
        ),
        tips=(
            "*Separate the person from the performance.* You're addressing a gap between "
            "expectation and reality — not labeling a 'bad employee.'",
            "*Make the expectation explicit first.* Have you clearly defined what 'good' looks "
            "like? If not, start there before escalating.",
            "*Document as you go.* Notes from conversations and agreed-upon timelines protect "
            "everyone and create real accountability.",
        ),
        deep_dive_intro=(
            "Performance management isn't a punishment — it's a *development process*. The best "
            "managers approach it with high standards AND genuine care. They don't rescue people "
            "from consequences, but they also don't give up before giving real support."
        ),
        big_ideas=(
            "*Early and often beats late and dramatic.* A small honest conversation now prevents a "
            "crisis six months later.",
            "*Your team is watching.* How you handle underperformance signals what you stand for "
            "and what you'll tolerate.",
            "*People deserve a real chance.* Clear expectations + genuine support + consistent "
            "feedback = a fair process.",
        ),
        dig_deeper_prompt=(
            '/maven → select "Performance Issues" → type: "Help me address performance issues with '
            '[role] who is struggling with [specific behavior/output]"'
        ),
    ),
    Topic(
        id="giving_feedback",
        label="📣 Giving Feedback",
        emoji="📣",
        why=(
            "Feedback is the fuel of growth. Without it, even your strongest performers plateau. "
            "The Leadership Code principle of *growing your people* is impossible without honest, "
            "timely feedback — and yet most managers either avoid it or save it for reviews."
        ),
        tips=(
            "*Be specific, behavioral, timely.* 'Great job' doesn't help. 'In yesterday's meeting, "
            "when you interrupted Sam twice, it shut down the conversation' — that's coaching.",
            "*Use SBI: Situation → Behavior → Impact.* Describe what happened, the specific "
            "behavior, and the impact you observed. No interpretation.",
            "*Deliver it like a gift.* Your tone and intention matter as much as your words. "
            "Feedback lands better when people feel you're in their corner.",
        ),
        deep_dive_intro=(
            "The best feedback cultures aren't built on annual reviews — they're built on "
            "*continuous, low-stakes conversations* where feedback is normal and expected. When "
            "feedback is rare, it feels like a big deal. When it's frequent, it becomes growth fuel."
        ),
        big_ideas=(
            "*Positive feedback is not optional.* Recognizing great work specifically and publicly "
            "is just as important as corrective feedback.",
            "*Ask before you tell.* 'How do you think that went?' often gets you further than "
            "jumping straight to your assessment.",
            "*Feedback is a relationship investment.* The more trust you've built, the more "
            "honestly you can speak — and the better it lands.",
        ),
        dig_deeper_prompt=(
            '/maven → select "Giving Feedback" → type: "Help me give feedback to [role] about '
            '[specific behavior or situation I observed]"'
        ),
    ),
    Topic(
        id="team_conflict",
        label="🔥 Team Conflict",
        emoji="🔥",
        why=(
            "Conflict on a team is not a sign of failure — avoidance is. Healthy teams disagree. "
            "The Leadership Code principles of *creating clarity* and *building trust* both require "
            "you to step into conflict, not around it. Your willingness to address tension is one "
            "of the biggest signals of your leadership character."
        ),
        tips=(
            "*Name it before it names you.* 'I've noticed some friction between you two — I want to "
            "address it directly.' Silence gives conflict permission to grow.",
            "*Meet individually before you bring people together.* Understand each perspective "
            "privately before facilitating a joint conversation.",
            "*Redirect to shared goals.* Move from 'who's right' to 'what do we both want for the "
            "team?' Shared purpose breaks most stalemates.",
        ),
        deep_dive_intro=(
            "The best teams have *productive conflict* — they challenge ideas, disagree openly, and "
            "push each other's thinking. The difference between destructive and productive conflict "
            "is psychological safety and a manager who models healthy disagreement."
        ),
        big_ideas=(
            "*Your neutrality is not optional.* Take sides and you lose both parties. Stay curious, "
            "stay fair.",
            "*Unresolved conflict has a cost.* Low collaboration, passive resistance, attrition — "
            "all downstream effects of conflict left to fester.",
            "*Some conflict is about more than the conflict.* Tension is often a symptom of unclear "
            "roles or unmet needs. Look for the root.",
        ),
        dig_deeper_prompt=(
            '/maven → select "Team Conflict" → type: "Help me navigate conflict between [describe '
            'the situation and people involved]"'
        ),
    ),
    Topic(
        id="new_manager",
        label="🧭 New Manager / Team Development",
        emoji="🧭",
        why=(
            "The transition from individual contributor to manager is one of the hardest pivots in "
            "a career. Everything that made you successful before can work against you now. The "
            "Leadership Code starts with *know yourself* — because new managers who succeed are the "
            "ones who get honest about what they don't yet know."
        ),
        tips=(
            "*Listen before you lead.* In your first 30 days, questions are more powerful than "
            "answers. Understand the team before you try to shape it.",
            "*Relationships are your foundation.* 1:1s with every team member in week one — not to "
            "assess, but to understand. Ask: 'What's working? What isn't?'",
            "*Define your style out loud.* Tell your team how you operate, how you make decisions, "
            "what you value. Don't make them guess.",
        ),
        deep_dive_intro=(
            "New managers often struggle not from lack of talent, but because no one told them that "
            "*management is a completely different job*. Your success now depends on developing "
            "others, not just performing yourself. That's a profound shift — and it takes real "
            "intention to make it."
        ),
        big_ideas=(
            "*Your job is to multiply, not add.* You succeed when your team succeeds. Investing in "
            "people pays back in ways your individual output never could.",
            "*Ask for feedback early and often.* The best new managers actively seek input on how "
            "they're doing. It builds trust and accelerates learning.",
            "*Own your mistakes out loud.* Naming your missteps openly is one of the fastest ways "
            "to build credibility with a new team.",
        ),
        dig_deeper_prompt=(
            '/maven → select "New Manager" → type: "I\'m a new manager and I need help with '
            '[specific challenge you\'re navigating right now]"'
        ),
    ),
    Topic(
        id="team_development",
        label="🌱 Team Development",
        emoji="🌱",
        why=(
            "Every team goes through predictable stages of growth — and most managers don't realize "
            "they're the variable that either accelerates or stalls the journey. Tuckman's model "
            "(Forming → Storming → Norming → Performing) gives you a map. The Leadership Code "
            "principle of *growing your people* isn't just about individuals — it's about building "
            "a team that performs together at its highest level."
        ),
        tips=(
            "*Diagnose before you prescribe.* Ask: which stage is my team in right now? Forming "
            "needs safety and clarity. Storming needs facilitation. Norming needs reinforcement. "
            "Performing needs autonomy and challenge.",
            "*Name the stage with your team.* Transparency accelerates development. Telling your "
            "team 'We're in Storming — this is normal and here's how we move through it' builds "
            "trust and reduces anxiety.",
            "*Your leadership role shifts at every stage.* Forming = guide and clarify. Storming = "
            "coach and facilitate. Norming = reinforce and step back. Performing = protect focus "
            "and raise the bar.",
        ),
        deep_dive_intro=(
            "Tuckman's model isn't just a theory — it's a diagnostic tool for managers who want to "
            "be intentional about how they build their teams. Most teams get stuck in Storming not "
            "because the team is broken, but because the manager doesn't know how to move them "
            "forward. Naming the stage changes your entire approach."
        ),
        big_ideas=(
            "*Storming is not failure — avoidance is.* Conflict in the Storming stage is a sign of "
            "investment. Teams that never storm never truly bond. Your job is to facilitate, not "
            "suppress.",
            "*Performing teams still need you.* High-performing teams don't need less leadership — "
            "they need different leadership. Protect their focus, clear obstacles, and keep raising "
            "the bar.",
            "*Teams can regress.* New members, restructures, or major change can send a Performing "
            "team back to Forming overnight. Recognizing regression early lets you respond instead "
            "of react.",
        ),
        dig_deeper_prompt=(
            '/maven → select "Team Development" → type: "My team seems to be in '
            '[Forming/Storming/Norming/Performing] and I\'m struggling with [specific dynamic or '
            'challenge]"'
        ),
    ),
)
