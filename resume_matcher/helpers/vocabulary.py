"""
Fixed keyword vocabularies used by the heuristic extractors and the matcher.

Scan order matters: skills are reported in the order they appear here, and
titles/education levels resolve to the first entry found in the text.
"""

NOT_DETECTED = "未检测到"
DEFAULT_TITLE = "开发工程师"
MANUAL_SOURCE = "manual"

# Used in place of JD keywords when the JD mentions none of SKILL_KEYWORDS
JD_SENTINEL_KEYWORD = "技能"

# Matched by case-insensitive substring; keep out single-letter terms
SKILL_KEYWORDS = (
    "JavaScript", "React", "Vue", "Angular", "Node.js", "TypeScript",
    "Python", "Java", "C++", "C#", "PHP", "Ruby", "Go", "Swift",
    "HTML", "CSS", "SASS", "Bootstrap", "Tailwind",
    "MongoDB", "MySQL", "PostgreSQL", "SQL", "NoSQL", "Redis",
    "AWS", "Azure", "Docker", "Kubernetes", "Git",
    "Linux", "Windows", "MacOS", "Android", "iOS",
    "前端", "后端", "全栈", "开发", "测试", "UI", "UX",
    "数据分析", "机器学习", "人工智能", "AI", "算法", "数据结构",
    "市场营销", "用户增长", "内容运营", "社交媒体",
    "Figma", "产品原型", "信息架构", "Tableau",
)

TITLE_KEYWORDS = (
    "前端开发工程师", "后端开发工程师", "全栈开发工程师",
    "软件工程师", "产品经理", "UI设计师", "UX设计师",
    "数据分析师", "人工智能工程师", "机器学习工程师",
    "测试工程师", "运维工程师", "项目经理",
    "内容运营", "市场营销", "用户研究", "产品设计",
)

# Scanned in this order; the first level present anywhere in the text wins
EDUCATION_LEVELS = ("博士", "硕士", "本科", "大专", "高中")

SCHOOL_SUFFIXES = ("大学", "学院", "学校")

# Lines containing these are treated as headers, not as a candidate name
NAME_HEADER_WORDS = ("简历", "个人")
