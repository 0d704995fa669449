"""
scoring/ — JTBD Forces Analysis & Organizational Readiness Scoring

Modules:
    utils.py                  - Decimal utilities
    force_score.py            - ForceScore validation
    force_aggregator.py       - Per-force counts, averages, ranked themes
    force_classifier.py       - Dominant / weak forces, force balance, readiness score
    insight_generator.py      - Ranked insights + recommendation table
    executive_summary.py      - Readiness / confidence levels, headline findings
    organizational_rollup.py  - Full pipeline → OrganizationalAnalysis
"""
