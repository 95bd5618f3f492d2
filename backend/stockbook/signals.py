# Overview: Session lifecycle signals (push-style notifications on sign-in/sign-out).

"""
Subscribers receive the Flask app as sender and the profile as keyword arg:

    @session_started.connect
    def on_login(app, profile, **extra): ...

Handlers run synchronously inside the request that signed in/out.
"""

from blinker import Namespace

_signals = Namespace()

session_started = _signals.signal("session-started")
session_ended = _signals.signal("session-ended")
