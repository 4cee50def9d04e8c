"""logic — Beam systems package.

Top-level modules
-----------------
beam_fsm      — per-beam shoot → fade → idle state machine
beam_styles   — the eight procedural beam geometry generators
tips          — arrow / circle tip marker
particles     — per-beam spark emission, integration, expiry, drawing
beam_manager  — beam collection: ids, per-frame update and render
"""
