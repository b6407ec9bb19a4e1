"""
Core Package.

Contains the generator passes:
- Candidate collection and type hierarchy linearization
- Parameter extraction, conflict detection and dispatch emission
- Render-tree key analysis
- Diagnostics, artifacts, tracing and the orchestration engine
"""
