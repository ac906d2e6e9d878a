"""
College Placement Portal
Students upload resumes, recruiters post jobs, the portal matches them.

Architecture:
- MongoDB: users, jobs, resumes (with skill analysis), applications
- Skill extractor: rule-based resume analysis (no AI calls)
- Role tagger + job matcher: eligibility filter, then skill-fit ranking
"""

__version__ = "1.0.0"
