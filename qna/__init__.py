"""
Q&A app

Holds what an audience and its leaders exchange inside a room:
- Questions (asked by guests or signed-in users, triaged by leaders)
- Answers (one per question, written by a leader)
- Upvotes (one per voter per question, used to rank the pending queue)

Every write is mirrored onto the realtime change feeds by qna.signals.
"""
__all__ = []
