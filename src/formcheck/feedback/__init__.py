from .feedback_throttle import FeedbackThrottle

__all__ = ['FeedbackThrottle']
