"""
JSON schemas for every structured oracle task.

Each spec is wrapped as {'name', 'strict', 'schema'} and unwrapped by the
provider before it is sent to the model. Property names are snake_case;
the oracle boundary also accepts camelCase replies.
"""

_STRING = {"type": "string"}
_NUMBER = {"type": "number"}
_STRING_LIST = {"type": "array", "items": _STRING}

_EXPERIENCE_ITEM = {
    "type": "object",
    "properties": {
        "title": _STRING,
        "company": _STRING,
        "duration": _STRING,
        "description": _STRING,
    },
}


JOB_PARSE_SCHEMA = {
    "name": "job_parse_schema",
    "strict": False,
    "schema": {
        "type": "object",
        "properties": {
            "title": _STRING,
            "department": _STRING,
            "location": _STRING,
            "min_years_experience": _NUMBER,
            "required_skills": _STRING_LIST,
            "nice_to_have_skills": _STRING_LIST,
            "required_certifications": _STRING_LIST,
            "education_level": _STRING,
            "salary_band": _STRING,
        },
        "required": ["title", "required_skills"],
    },
}


RESUME_PARSE_SCHEMA = {
    "name": "resume_parse_schema",
    "strict": False,
    "schema": {
        "type": "object",
        "properties": {
            "name": _STRING,
            "email": _STRING,
            "phone": _STRING,
            "location": _STRING,
            "summary": _STRING,
            "total_years_experience": _NUMBER,
            "skills": _STRING_LIST,
            "education": _STRING_LIST,
            "experience": {"type": "array", "items": _EXPERIENCE_ITEM},
            "certifications": _STRING_LIST,
        },
    },
}


SCORE_SCHEMA = {
    "name": "candidate_score_schema",
    "strict": False,
    "schema": {
        "type": "object",
        "properties": {
            "score": {
                "type": "object",
                "properties": {
                    "skills_match": _NUMBER,
                    "experience_match": _NUMBER,
                    "education_match": _NUMBER,
                    "location_match": _NUMBER,
                    "overall_score": _NUMBER,
                },
                "required": ["overall_score"],
            },
            "flags": _STRING_LIST,
            "status": {"type": "string", "enum": ["top_fit", "borderline", "not_suitable"]},
            "analysis": _STRING,
            "mismatch_reason": _STRING,
            "has_tailoring_potential": {"type": "boolean"},
            "transferable_skills": _STRING_LIST,
        },
        "required": ["score", "status", "analysis", "mismatch_reason", "has_tailoring_potential"],
    },
}


TAILOR_SCHEMA = {
    "name": "tailored_resume_schema",
    "strict": False,
    "schema": {
        "type": "object",
        "properties": {
            "suggested_summary": _STRING,
            "optimized_experience": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "original_title": _STRING,
                        "suggested_bullets": _STRING_LIST,
                    },
                },
            },
            "justification": _STRING,
        },
        "required": ["suggested_summary", "optimized_experience", "justification"],
    },
}


REPORT_SCHEMA = {
    "name": "talent_report_schema",
    "strict": False,
    "schema": {
        "type": "object",
        "properties": {
            "summary": _STRING,
            "strengths": _STRING_LIST,
            "weaknesses": _STRING_LIST,
            "recommendation": _STRING,
            "pipeline_health_score": _NUMBER,
        },
        "required": ["summary", "strengths", "weaknesses", "recommendation", "pipeline_health_score"],
    },
}


RESUME_BUILDER_SCHEMA = {
    "name": "resume_builder_schema",
    "strict": False,
    "schema": {
        "type": "object",
        "properties": {
            "name": _STRING,
            "email": _STRING,
            "phone": _STRING,
            "location": _STRING,
            "summary": _STRING,
            "skills": _STRING_LIST,
            "experience": {"type": "array", "items": _EXPERIENCE_ITEM},
            "education": _STRING_LIST,
        },
    },
}
