#!/usr/bin/env python3
"""
Resume Reading Module - uploaded resume files to text.
"""
from etl.resume.parser import ResumeParser, ParsedResume

__all__ = [
    'ResumeParser',
    'ParsedResume',
]
