"""
WellnessWave Backend

Rule-based multilingual wellness assistant: symptom guidance, meal and
workout suggestions, and emergency escalation in English, Hindi and Gujarati.
"""

__version__ = "1.0.0"
