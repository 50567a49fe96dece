"""
load-bearer: a deliberately simple HTTP server for load and latency tests.

It serves three fixed endpoints that model distinct backend behaviours:
an immediate reply, a reply deferred on the event loop's timer, and a reply
delivered after stalling the whole process.
"""
