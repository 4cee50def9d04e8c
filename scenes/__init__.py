"""scenes — pygame hosts for the beam system.

beam_scene  — interactive sandbox (fire, cycle styles, clear, rebuild)
"""
