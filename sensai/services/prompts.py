"""
Prompt builders - every prompt sent to Gemini lives here.

Each builder takes plain values and returns the prompt string; the
services only decide WHEN to call the model.
"""

import json
from typing import List, Optional


COACH_INSTRUCTIONS = """
---

**Instructions:**
- Use section headings with relevant emojis (e.g., '✅ Strengths', '🎯 Areas for Growth', '🛠️ Action Plan', '💡 Recommended Resources', '🚀 Next Steps').
- For inner points, use either bullet points (with or without emojis) or numbered lists, whichever is most readable for the content.
- Add a blank line between each bullet/numbered point and section for readability.
- Use markdown for all formatting (headings, bold, lists).
"""


def industry_insights_prompt(industry: str) -> str:
    return f"""
Analyze the current state of the {industry} industry and provide insights in ONLY the following JSON format without any additional notes or explanations:
{{
  "salaryRanges": [
    {{ "role": "string", "min": number, "max": number, "median": number, "location": "string" }}
  ],
  "growthRate": number,
  "demandLevel": "High" | "Medium" | "Low",
  "topSkills": ["skill1", "skill2"],
  "marketOutlook": "Positive" | "Neutral" | "Negative",
  "keyTrends": ["trend1", "trend2"],
  "recommendedSkills": ["skill1", "skill2"]
}}

IMPORTANT: Return ONLY the JSON. No additional text, notes, or markdown formatting.
Include at least 5-10 common roles for salary ranges.
Growth rate should be a percentage.
Include at least 15-20 skills and trends.
"""


def quiz_prompt(company: Optional[str], role: Optional[str], industry: str, skills: List[str]) -> str:
    target = role or industry
    skills_line = f"\n- The candidate lists these skills: {', '.join(skills)}." if skills else ""
    return f"""
Generate a JSON mock interview quiz for a candidate applying for '{target}' at '{company or ''}'.

- Make all questions as specific as possible to the company and role (use public info if available).{skills_line}
- Structure:
{{
  "Aptitude": {{
    "Logical Reasoning": [3 MCQs],
    "Critical Reasoning": [3 MCQs],
    "Quantitative Aptitude": [3 MCQs],
    "Data Interpretation": [3 MCQs]
  }},
  "CS Fundamentals": {{
    "DSA": [2 questions: 1 LeetCode-style (questionType: 'leetcode-algorithm'), 1 code snippet (questionType: 'code-correction', 'code-completion', or 'missing-line')],
    "Operating Systems": [1-2 open-ended],
    "Databases": [1-2 open-ended],
    "Networking": [1-2 open-ended],
    "OOP/Software Engineering": [1-2 open-ended]
  }},
  "Behavioral & Communication": {{
    "Behavioral": [1-2 open-ended],
    "Situational": [1-2 open-ended],
    "Communication/Presentation": [1-2 open-ended]
  }}
}}
- MCQs: "question", "options" (4), "correctAnswer", "explanation".
- DSA: 1 LeetCode-style, 1 code snippet-based.
- Open-ended: "question", "explanation".
- Return ONLY the JSON, no extra text or markdown.
"""


def subsection_questions_prompt(section: str, subsection: str, count: int, company: str, role: str) -> str:
    if section == "Aptitude":
        return (
            f"Generate {count} {subsection} aptitude MCQ questions (with 4 options and correct answer) "
            f"for a {role} interview at {company}. "
            "Return JSON: [{question, options, correctAnswer, explanation}]"
        )
    if section == "CS Fundamentals":
        return (
            f"Generate {count} open-ended {subsection} technical interview questions "
            f"for a {role} interview at {company}. Return JSON: [{{question, explanation}}]"
        )
    return (
        f"Generate {count} open-ended {subsection} interview questions "
        f"for a {role} interview at {company}. Return JSON: [{{question, explanation}}]"
    )


def improvement_tip_prompt(industry: str, wrong_answers: List[dict]) -> str:
    wrong_text = "\n\n".join(
        f'Question: {q["question"]}\nCorrect Answer: "{q["answer"]}"\nUser Answer: {q["user_answer"]}'
        for q in wrong_answers
    )
    return f"""
The user got the following {industry} technical interview questions wrong:

{wrong_text}

Based on these mistakes, provide a concise, specific improvement tip.
Focus on the knowledge gaps revealed by these wrong answers.
Keep the response under 2 sentences and make it encouraging.
Don't explicitly mention the mistakes, instead focus on what to learn/practice.
"""


def answer_feedback_prompt(question: str, answer: str) -> str:
    return (
        "You are an expert interview coach. Here is a technical interview question and a candidate's answer. "
        "Give concise, constructive feedback (2-3 sentences) on the answer, focusing on clarity, relevance, "
        f"and how it could be improved.\n\nQuestion: {question}\nAnswer: {answer}"
    )


def latex_improvement_prompt(user_request: str, current_latex: str, form_data: dict) -> str:
    return f"""You are an expert LaTeX resume writer. The user has provided their resume data and wants you to improve or modify their LaTeX code.

Current LaTeX Code:
{current_latex}

User's Request: {user_request}

User's Resume Data:
{json.dumps(form_data, indent=2, default=str)}

Please provide an improved or modified LaTeX code based on the user's request.
- Keep the same document structure and commands
- Only modify what the user specifically requested
- Ensure all LaTeX syntax is correct
- Return ONLY the complete LaTeX code, no explanations or markdown formatting
- Make sure all user data is properly included in the output"""


def _leetcode_line(stats: Optional[dict]) -> str:
    stats = stats or {}
    line = f"\n**LeetCode Stats:** Total Solved: {stats.get('totalSolved') or 0}"
    if stats.get("totalQuestions"):
        line += f" out of {stats['totalQuestions']}"
    line += (
        f" (Easy: {stats.get('easySolved') or 0}, Medium: {stats.get('mediumSolved') or 0}, "
        f"Hard: {stats.get('hardSolved') or 0})"
    )
    return line


def skill_gap_prompt(target_role: str, skills: List[str], leetcode_stats: Optional[dict],
                     resume_text: Optional[str]) -> str:
    prompt = f"You are an expert, friendly career coach AI. Analyze the user's readiness for the role of **{target_role}**.\n"
    if skills:
        prompt += f"\n**Current Skills:** {', '.join(skills)}"
    if leetcode_stats:
        prompt += _leetcode_line(leetcode_stats)
    if resume_text:
        prompt += f"\n**Resume:**\n{resume_text}"
    prompt += "\n\n" + COACH_INSTRUCTIONS.strip() + (
        "\n- Analyze the user's current skills, coding practice, and resume."
        f"\n- Identify the most important skill gaps for a {target_role}."
        "\n- Recommend a personalized learning path (with 2-3 specific resources, e.g., courses, books, or websites)."
        "\n- Make your advice concise, visually clear, and motivating."
        "\n- End with a motivating closing.\n"
    )
    return prompt


def resume_image_prompt(target_company: Optional[str], target_role: Optional[str]) -> str:
    prompt = "You are an expert, friendly career coach AI. Analyze the user's resume (image attached)"
    if target_company and target_role:
        prompt += f" for a role at **{target_company}** as **{target_role}**"
    elif target_company:
        prompt += f" for a role at **{target_company}**"
    elif target_role:
        prompt += f" for the role of **{target_role}**"
    else:
        prompt += " for the role they are targeting."
    prompt += "\n\n" + COACH_INSTRUCTIONS.strip() + (
        "\n- Analyze the user's experience, skills, and education from the resume image."
        "\n- Identify the most important skill gaps for their target company and role."
        "\n- Recommend a personalized learning path (with 2-3 specific resources, e.g., courses, books, or websites)."
        "\n- Make your advice concise, visually clear, and motivating."
        "\n- End with a motivating closing.\n"
    )
    return prompt


def coding_recommendation_prompt(target_role: str, leetcode_stats: Optional[dict],
                                 resume_text: Optional[str]) -> str:
    prompt = (
        "You are an expert, friendly career coach AI. Analyze the user's LeetCode stats"
        f"{' and resume' if resume_text else ''} for the role of **{target_role}**.\n"
    )
    prompt += _leetcode_line(leetcode_stats)
    if resume_text:
        prompt += f"\n**Resume:**\n{resume_text}"
    prompt += "\n\n" + COACH_INSTRUCTIONS.strip() + (
        "\n- Give 2-3 specific, actionable, and creative recommendations to improve their coding interview readiness."
        "\n- Suggest a fun or motivational next step (e.g., a challenge, a resource, or a positive affirmation)."
        "\n- Make your advice concise, visually clear, and inspiring."
        "\n- Start with a friendly greeting and end with a motivating closing."
    )
    return prompt
