"""Core duel infrastructure: data enums, engine state, events, intents and rendering contracts."""
