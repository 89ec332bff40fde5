RESUME_EXTRACT_PROMPT = """You are an information extractor.
Analyze the resume below and respond ONLY with a valid JSON object with these exact keys:
- "name": string (candidate's full name)
- "contact": object with "phone" and "email" (string or null)
- "educationDetails": object with "school", "major", "degree" for the highest education (string or null)
- "experienceDetails": array of objects with "company", "title", "startDate", "endDate", "description"
- "totalYearsExperience": number (estimated total years of professional experience, null if unknown)
- "coreSkills": array of strings (languages, frameworks, technical skills)
- "softSkills": array of strings (e.g. 沟通能力, 团队合作)
- "processSkills": array of strings (e.g. 用户调研, 项目管理)
- "tools": array of strings (software tools and platforms)
- "experienceSummary": string (2-3 sentence summary, null if not applicable)

- If unknown, use null or an empty list.
- Use only information present in the text.

RESUME:
{doc}
"""

JD_EXTRACT_PROMPT = """You are an information extractor.
Analyze the job description below and respond ONLY with a valid JSON object with these exact keys:
- "jobTitle": string
- "requiredSkills": array of strings (essential skills explicitly required)
- "preferredSkills": array of strings (skills marked preferred, plus, nice to have)
- "yearsExperience": string (e.g. "3-5年", "不限", null if not mentioned)
- "educationLevel": string (e.g. "本科", "硕士", "不限", null if not mentioned)
- "responsibilitiesKeywords": array of strings (at most 7 keywords)

- If unknown, use null or an empty list.

JOB DESCRIPTION:
{doc}
"""

HR_EVALUATION_PROMPT = """You are a senior technical recruiter hiring for a fast-growing startup.
Evaluate how well the candidate fits the job description below. Weigh:
1. Hard skills and experience: relevance and depth against the JD, project quality, years.
2. Learning ability and potential: evidence of picking up new stacks quickly.
3. Startup fit: ownership, self-drive, problem solving, comfort with ambiguity.
4. Bonus points and red flags: preferred skills held, gaps or warning signs.

Respond ONLY with a valid JSON object with these exact keys:
- "overallFitScore": integer 0-100 (90+ top match; 75-89 strong; 60-74 worth interviewing; 40-59 partial; <40 poor)
- "summary": string (one sentence on the main strengths, weaknesses and recommendation)
- "potentialRating": string ("高", "中" or "低")
- "startupFitRating": string ("高", "中" or "低")
- "keyStrengths": array of 3-4 strings
- "keyConcerns": array of 3-4 strings
- "interviewFocusAreas": array of 2-3 concrete interview suggestions

Write the string values in Chinese. Use only information present in the inputs.

JOB DESCRIPTION:
{jd}

CANDIDATE:
{candidate}
"""
