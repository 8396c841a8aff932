from __future__ import annotations

from typing import Union

from jinja2 import Template

from .model import Style

SYSTEM_PROMPT = "You are an expert resume editor."

GENERAL_PROMPT = """You are an expert resume editor.
Rewrite the resume bullet into 3 high-quality variations that feel compelling and clear.

Language: write in the SAME language as the input (if mixed/unclear, default to English).
Tense & POV: past tense, no first-person pronouns.
Tone: professional, confident, no hype.
Forbidden: "responsible for", buzzwords, filler, emojis, quotes.
Formatting: each variation MUST be a single line. Output EXACTLY 3 lines. No headings/prefixes.

Core structure (adapt as needed):
Action verb + what + how + tools/tech + scope + outcome/impact + metric(s) + timeframe (if relevant)"""

STYLE_PROMPTS = {
    Style.IMPACTFUL: (
        "Style: Impactful\n"
        "Emphasize outcome and scope. Prefer strong verbs (Led, Drove, Accelerated, Delivered, Orchestrated).\n"
        "Use at least one concrete metric or scope indicator (users, revenue, latency, volume)."
    ),
    Style.TECHNICAL: (
        "Style: Technical\n"
        "Highlight architecture, stack, scale, performance. Include specific technologies "
        "(e.g., Node.js, React, AWS, Postgres), scale (RPS, data size), and perf numbers (p95, CPU, memory).\n"
        "Prefer precise terms over generic words (service, microservice, pipeline, index, cache, shard, CDN).\n"
        "Avoid marketing phrasing."
    ),
    Style.METRICS_FOCUSED: (
        "Style: Metrics-Focused\n"
        "Include at least TWO numeric metrics (percent, counts, timeframes) and a clear before/after "
        "or baseline (e.g., 180ms → 95ms; +32%; 1.2M users; 4 regions; 3 months)."
    ),
    Style.CONCISE: (
        "Style: Concise\n"
        "Keep each variation ~12-18 words. Prioritize the most meaningful action + impact. "
        "Remove articles and filler. Still include ONE concrete metric."
    ),
}

STYLE_EXAMPLES = {
    Style.IMPACTFUL: (
        "Orchestrated launch of analytics dashboard used by 1.2M users, speeding insights and trimming reporting time 45%.",
        "Led cross-functional rollout of subscription flow, boosting conversions 23% and reducing support tickets 18%.",
        "Delivered caching strategy that cut page load times 38% and stabilized uptime to 99.95%.",
    ),
    Style.TECHNICAL: (
        "Engineered Node.js + Postgres microservice with Redis cache, handling 3k RPS; reduced p95 latency 120ms → 60ms.",
        "Designed S3 + CloudFront asset pipeline with checksum invalidation, slashing cold starts 55% and egress costs 28%.",
        "Implemented columnar analytics store (DuckDB/Parquet) enabling 10× faster cohort queries over 200M rows.",
    ),
    Style.METRICS_FOCUSED: (
        "Increased trial-to-paid by 27% and reduced churn by 6 pts within 90 days via experiment-driven onboarding.",
        "Cut p99 API latency 42% and error rate 65% by refactoring hot paths and introducing circuit breakers.",
        "Grew weekly active users 18% and referral sign-ups 2.3× through shareable templates and in-app prompts.",
    ),
    Style.CONCISE: (
        "Optimized checkout; +19% conversion, −35% errors in 6 weeks.",
        "Shipped autoscaling; p95 −40% at 3k RPS on AWS.",
        "Launched email nudge; +22% reactivation in 30 days.",
    ),
}

USER_PROMPT = Template(
    """{{ general }}

{{ style_block }}

Examples ({{ style }}):
{% for example in examples %}- {{ example }}
{% endfor %}
Bullet:
{{ bullet }}

Return exactly 3 variations as 3 separate lines (no extra text)."""
)


def build_prompt(bullet: str, style: Union[Style, str]) -> str:
    resolved = Style.resolve(style)
    return USER_PROMPT.render(
        general=GENERAL_PROMPT,
        style_block=STYLE_PROMPTS[resolved],
        style=resolved.value,
        examples=STYLE_EXAMPLES[resolved],
        bullet=bullet,
    )
