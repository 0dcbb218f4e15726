from .repo import ZERO_SHA, GitRepo, PushRef, parse_pre_push_input

__all__ = ["ZERO_SHA", "GitRepo", "PushRef", "parse_pre_push_input"]
