"""Keyword extraction and matching for resume-JD scoring.

Extraction is deterministic and walks the JD in priority order: job title,
required sections, responsibilities, nice-to-have sections, technology
keywords anywhere, action verbs, then TF-IDF-ranked filler terms.
Matching tries exact, stem, synonym and fuzzy matches in that order.
"""

import logging
import re
from collections import Counter

from nltk.stem import PorterStemmer
from rapidfuzz import fuzz

from config import settings
from models.schemas.score import ExtractedKeywords, KeywordMatch, KeywordPriority
from services.keyword_matcher import count_keyword_occurrences, find_keyword_spans, keyword_in_text
from services.sanitizer import round_half_up, sanitize_score_value
from services.section_parser import extract_job_title, parse_jd_sections
from services.similarity import tfidf_term_weights

logger = logging.getLogger(__name__)

_stemmer = PorterStemmer()

# ---------------------------------------------------------------------------
# Stopwords: English function words plus JD filler that wastes keyword slots
# ---------------------------------------------------------------------------
STOPWORDS: frozenset[str] = frozenset({
    # Articles and pronouns
    "a", "an", "the", "i", "me", "my", "myself", "we", "our", "ours",
    "ourselves", "you", "your", "yours", "yourself", "yourselves", "he", "him",
    "his", "himself", "she", "her", "hers", "herself", "it", "its", "itself",
    "they", "them", "their", "theirs", "themselves", "what", "which", "who",
    "whom", "this", "that", "these", "those",
    # Auxiliaries
    "am", "is", "are", "was", "were", "be", "been", "being", "have", "has",
    "had", "having", "do", "does", "did", "doing", "would", "should", "could",
    "ought", "will", "shall", "can", "may", "might", "must",
    # Prepositions
    "at", "by", "for", "from", "in", "into", "of", "on", "to", "with", "about",
    "above", "across", "after", "against", "along", "among", "around",
    "before", "behind", "below", "beneath", "beside", "between", "beyond",
    "during", "except", "inside", "near", "off", "outside", "over", "past",
    "since", "through", "throughout", "toward", "under", "until", "up", "upon",
    "within", "without",
    # Conjunctions and qualifiers
    "and", "but", "or", "nor", "so", "yet", "both", "either", "neither", "not",
    "only", "own", "same", "than", "too", "very", "just", "also", "such",
    "other", "more", "most", "all", "any", "each", "every", "some", "well",
    # Generic JD vocabulary
    "ability", "able", "work", "working", "company", "team", "role",
    "position", "opportunity", "looking", "seeking", "join", "offer",
    "including", "etc", "related", "relevant", "strong", "excellent", "good",
    "great", "proven", "demonstrated", "successful", "effective", "required",
    "requirements", "responsibilities", "qualifications", "preferred",
    "minimum", "ensure", "provide", "support", "help", "need", "needs", "make",
    "proficiency", "proficient", "understanding", "familiarity", "familiar",
    "knowledge", "experience", "expertise", "exposure", "contributions",
    "passion", "passionate", "enthusiasm", "comfortable", "competence",
    "competent", "skilled", "capable", "hands-on", "background", "plus",
    "nice", "have", "ideal", "candidate", "candidates", "skills",
    # Time
    "years", "year", "months", "month", "days", "day", "time", "times",
})

# ---------------------------------------------------------------------------
# Skill synonyms: canonical term -> variants that should count as a match
# ---------------------------------------------------------------------------
SKILL_SYNONYMS: dict[str, list[str]] = {
    # Cloud platforms
    "cloud": ["gcp", "aws", "azure", "cloud-native", "cloud infrastructure", "google cloud", "amazon web services"],
    "gcp": ["google cloud platform", "google cloud", "gke", "cloud run", "bigquery"],
    "aws": ["amazon web services", "ec2", "s3", "lambda", "eks", "cloudwatch", "sagemaker"],
    "azure": ["microsoft azure", "azure devops", "aks", "azure functions"],
    # Leadership
    "leadership": ["led", "leading", "leader", "managed", "managing", "directed", "oversaw", "headed", "spearheaded"],
    "management": ["manager", "managing", "managed", "supervising", "supervisor", "oversight"],
    "engineering manager": ["tech lead manager", "engineering lead", "eng manager", "engineering mgr"],
    "director": ["director of engineering", "engineering director"],
    "people management": ["people manager", "team management", "managing people", "direct reports"],
    "mentoring": ["mentorship", "coaching", "career development", "growing engineers"],
    # Platform and infrastructure
    "platform": ["platform engineering", "internal platform", "developer platform", "devex", "infrastructure"],
    "infrastructure": ["infra", "cloud infrastructure", "platform infrastructure"],
    "devops": ["devex", "developer experience", "developer productivity", "developer tools"],
    "sre": ["site reliability", "reliability engineering", "platform reliability"],
    "system design": ["systems design", "architecture design", "technical design"],
    # Containers
    "kubernetes": ["k8s", "gke", "eks", "aks", "container orchestration"],
    "docker": ["containers", "containerization", "containerized"],
    "terraform": ["infrastructure as code", "iac", "pulumi", "hcl"],
    # CI/CD
    "ci/cd": ["cicd", "continuous integration", "continuous deployment", "continuous delivery", "pipelines"],
    "github actions": ["gh actions", "github workflows"],
    "jenkins": ["ci server", "build automation"],
    # Languages
    "python": ["py", "python3", "python2"],
    "javascript": ["js", "node", "node.js", "typescript", "ts", "ecmascript"],
    "typescript": ["ts"],
    "java": ["jvm", "spring", "spring boot"],
    "go": ["golang", "go lang"],
    "c++": ["cpp", "c plus plus"],
    "rust": ["rustlang"],
    "ruby": ["rails", "ruby on rails"],
    "scala": ["akka", "play framework"],
    "kotlin": ["android kotlin", "kotlin multiplatform"],
    "swift": ["swiftui", "ios swift"],
    # Methodologies
    "agile": ["scrum", "kanban", "sprint", "agile methodology", "agile development"],
    "scrum": ["sprint planning", "scrum master", "agile scrum"],
    # Architecture
    "microservices": ["microservice", "service-oriented", "distributed services"],
    "distributed systems": ["distributed computing", "distributed architecture"],
    "api": ["api design", "rest", "restful", "graphql", "grpc", "api development"],
    "event-driven": ["event sourcing", "cqrs", "message-driven", "pub/sub"],
    # Data stores
    "sql": ["mysql", "postgresql", "postgres", "database", "rdbms"],
    "nosql": ["mongodb", "dynamodb", "cassandra", "redis"],
    "data modeling": ["schema design", "database design"],
    # Observability
    "observability": ["monitoring", "logging", "tracing", "metrics", "opentelemetry", "prometheus", "grafana"],
    "monitoring": ["alerting", "dashboards"],
    # Communication
    "stakeholder management": ["stakeholder alignment", "cross-functional", "executive communication"],
    "communication": ["written communication", "verbal communication", "presentation"],
    # Domains
    "healthcare": ["health tech", "healthtech", "medical", "clinical", "hipaa"],
    "fintech": ["financial technology", "banking", "payments"],
    "ecommerce": ["e-commerce", "online retail", "marketplace"],
    # AI/ML
    "machine learning": ["ml", "deep learning", "neural networks", "model training", "ml engineering"],
    "artificial intelligence": ["ai", "generative ai", "gen ai", "llm", "large language models"],
    "tensorflow": ["tf", "keras"],
    "pytorch": ["torch", "torchvision"],
    "data science": ["data scientist", "statistical modeling", "predictive analytics"],
    "nlp": ["natural language processing", "text mining", "language models"],
    "computer vision": ["image recognition", "object detection"],
    # Data engineering
    "data pipeline": ["etl", "data ingestion", "data workflow", "data orchestration"],
    "data warehouse": ["data lake", "data lakehouse", "olap", "dimensional modeling"],
    "apache spark": ["spark", "pyspark", "spark sql"],
    "apache kafka": ["kafka", "kafka streams", "event streaming"],
    "airflow": ["apache airflow", "workflow orchestration"],
    # Security
    "security": ["cybersecurity", "infosec", "information security", "appsec"],
    "authentication": ["oauth", "saml", "openid", "sso"],
    "compliance": ["soc2", "soc 2", "gdpr", "hipaa", "pci dss", "iso 27001"],
    # Product
    "product management": ["product manager", "product owner", "product strategy"],
    "roadmap": ["product roadmap", "technology roadmap", "strategic planning"],
    # Frontend and mobile
    "frontend": ["front-end", "front end", "client-side", "ui development"],
    "react": ["reactjs", "react.js", "react hooks", "react native"],
    "css": ["sass", "scss", "tailwind", "styled-components"],
    "mobile": ["mobile development", "mobile app", "native mobile"],
    "ios": ["iphone", "ipad", "uikit", "swiftui"],
    "android": ["android sdk", "jetpack compose"],
    # Testing
    "testing": ["test automation", "qa", "quality assurance", "test engineering"],
    "unit testing": ["unit tests", "test-driven development", "tdd"],
    "integration testing": ["integration tests", "e2e testing", "end-to-end testing"],
    # Project management
    "project management": ["program management", "delivery management", "project planning"],
    "jira": ["atlassian", "confluence"],
}

# Reverse index: variant -> canonical terms that list it
SYNONYM_REVERSE_INDEX: dict[str, list[str]] = {}
for _canonical, _variants in SKILL_SYNONYMS.items():
    for _variant in _variants:
        SYNONYM_REVERSE_INDEX.setdefault(_variant, []).append(_canonical)

# ---------------------------------------------------------------------------
# Multi-word phrases extracted before single-word tokenization
# ---------------------------------------------------------------------------
KNOWN_PHRASES: frozenset[str] = frozenset({
    # AI/ML
    "machine learning", "deep learning", "neural networks", "natural language processing",
    "computer vision", "data science", "artificial intelligence", "generative ai",
    "large language models", "model training", "reinforcement learning", "feature engineering",
    # Data
    "data pipeline", "data warehouse", "data lake", "data engineering", "data modeling",
    "data governance", "data quality", "data analytics", "big data", "data processing",
    "data integration", "data migration",
    # Architecture and systems
    "system design", "systems design", "distributed systems", "microservices architecture",
    "event-driven architecture", "service-oriented architecture", "domain-driven design",
    "api design", "api development", "technical architecture", "solution architecture",
    "high availability", "fault tolerance", "load balancing", "horizontal scaling",
    # Cloud and infrastructure
    "cloud infrastructure", "infrastructure as code", "cloud migration",
    "container orchestration", "platform engineering", "developer platform",
    "google cloud platform", "amazon web services", "microsoft azure",
    "site reliability", "reliability engineering",
    # DevOps
    "continuous integration", "continuous deployment", "continuous delivery",
    "github actions", "build automation", "deployment automation", "configuration management",
    # Management and leadership
    "engineering manager", "engineering director", "tech lead", "technical lead",
    "people management", "team management", "team building", "performance management",
    "stakeholder management", "direct reports", "product management", "product manager",
    "program management", "project management", "change management", "talent development",
    "technical strategy",
    # Software engineering
    "software engineering", "software development", "software architecture",
    "full stack", "back end", "front end", "test-driven development", "code review",
    "technical debt", "agile development", "agile methodology", "design patterns",
    "functional programming", "version control",
    # Frontend and mobile
    "user interface", "user experience", "design system", "component library",
    "responsive design", "web development", "mobile development", "mobile app",
    "react native",
    # Security
    "information security", "application security", "network security",
    "threat modeling", "penetration testing", "access control", "identity management",
    # Testing
    "test automation", "quality assurance", "integration testing", "end-to-end testing",
    "unit testing", "performance testing", "load testing", "regression testing",
    # Databases and messaging
    "database design", "schema design", "query optimization",
    "api gateway", "service mesh", "message queue", "event streaming",
    # Business
    "business intelligence", "market research", "user research", "customer experience",
    "digital transformation", "technology roadmap", "strategic planning", "open source",
    "risk management", "regulatory compliance",
    # Observability
    "distributed tracing", "incident management", "log management",
    # Roles
    "software engineer", "senior engineer", "staff engineer", "principal engineer",
    "engineering lead", "data engineer", "data scientist", "data analyst",
    "solutions architect", "cloud architect", "devops engineer", "security engineer",
    "frontend engineer", "backend engineer", "machine learning engineer", "platform engineer",
})

# Longest first so "machine learning engineer" wins over "machine learning"
_SORTED_PHRASES = sorted(KNOWN_PHRASES, key=lambda p: (-len(p), p))

TECH_KEYWORDS: frozenset[str] = frozenset({
    # Cloud
    "gcp", "aws", "azure", "cloud", "kubernetes", "k8s", "docker", "terraform",
    "ansible", "pulumi", "cloudformation",
    # Languages
    "python", "java", "javascript", "typescript", "go", "golang", "rust", "c++",
    "c#", "ruby", "scala", "kotlin", "swift",
    # Frameworks
    "react", "angular", "vue", "node.js", "django", "flask", "spring", "rails",
    "express", "fastapi", "next.js", ".net",
    # Data
    "sql", "postgresql", "mysql", "mongodb", "redis", "elasticsearch", "kafka",
    "spark", "hadoop", "bigquery", "snowflake", "databricks", "airflow",
    # CI/CD
    "jenkins", "github", "gitlab", "bitbucket", "circleci", "argocd", "ci/cd",
    # Monitoring
    "prometheus", "grafana", "datadog", "splunk", "pagerduty", "opentelemetry",
    # APIs and security
    "rest", "graphql", "grpc", "websockets", "oauth", "jwt", "sso", "iam",
    # Methodologies
    "agile", "scrum", "kanban", "devops", "sre",
    # Multi-word
    "machine learning", "deep learning", "data pipeline", "data warehouse",
    "infrastructure as code", "system design", "distributed systems",
    "github actions", "site reliability",
})

ACTION_VERBS: frozenset[str] = frozenset({
    # Leadership
    "led", "managed", "directed", "oversaw", "headed", "supervised", "mentored",
    "coached", "guided", "coordinated", "orchestrated", "spearheaded",
    # Achievement
    "achieved", "delivered", "accomplished", "completed", "exceeded", "surpassed",
    # Creation
    "built", "created", "designed", "developed", "established", "founded",
    "implemented", "launched", "initiated", "introduced",
    # Improvement
    "improved", "enhanced", "optimized", "streamlined", "accelerated", "increased",
    "reduced", "decreased", "transformed", "modernized", "upgraded", "drove",
    # Strategy
    "architected", "strategized", "planned", "pioneered", "innovated",
    # Collaboration
    "collaborated", "partnered", "aligned", "unified", "integrated",
    # Technical
    "engineered", "automated", "scaled", "migrated", "deployed", "configured",
})

# Tech names whose punctuation the word splitter would otherwise destroy
_SPECIAL_TOKENS: dict[str, str] = {
    "c++": "cplusplus",
    "c#": "csharp",
    ".net": "dotnet",
    "node.js": "nodejs",
    "react.js": "reactjs",
    "vue.js": "vuejs",
    "next.js": "nextjs",
    "ci/cd": "cicd",
}
_RESTORED_TOKENS = {placeholder: literal for literal, placeholder in _SPECIAL_TOKENS.items()}

_SPLIT_RE = re.compile(r"[^a-z0-9-]+")

# Fuzzy matching only for single tokens at least this long
_FUZZY_MIN_LENGTH = 5


def tokenize(text: str) -> list[str]:
    """Lowercase word tokens; keeps hyphenated compounds and names like c++."""
    normalized = text.lower()
    for literal, placeholder in _SPECIAL_TOKENS.items():
        normalized = normalized.replace(literal, f" {placeholder} ")

    words = []
    for raw in _SPLIT_RE.split(normalized):
        word = raw.strip("-")
        if len(word) > 1:
            words.append(_RESTORED_TOKENS.get(word, word))
    return words


def extract_phrases(text: str) -> tuple[list[str], str]:
    """Pull known phrases out of ``text``, longest first.

    Returns the phrases found (one entry per occurrence) and the lowercased
    text with those occurrences blanked out.
    """
    remaining = text.lower()
    phrases: list[str] = []
    for phrase in _SORTED_PHRASES:
        for start, end in find_keyword_spans(remaining, phrase):
            phrases.append(phrase)
            remaining = remaining[:start] + " " * (end - start) + remaining[end:]
    return phrases, remaining


def tokenize_with_phrases(text: str) -> list[str]:
    phrases, remainder = extract_phrases(text)
    return phrases + tokenize(remainder)


def stem_word(word: str) -> str:
    return _stemmer.stem(word.lower())


def word_count(text: str) -> int:
    return len(tokenize(text))


def calculate_dynamic_keyword_count(job_description: str) -> int:
    """clamp(15 + words/50 + min(sections, 5), 10, 40)"""
    words = len(tokenize(job_description))
    sections = len(parse_jd_sections(job_description))
    return max(10, min(40, 15 + words // 50 + min(sections, 5)))


class _KeywordCollector:
    """Ordered, deduplicated keyword list; the first priority assigned sticks."""

    def __init__(self) -> None:
        self.keywords: list[str] = []
        self.priorities: dict[str, KeywordPriority] = {}

    def add(self, word: str, bucket: list[str], priority: KeywordPriority) -> bool:
        is_phrase = " " in word
        if word in STOPWORDS or word.isdigit():
            return False
        if not is_phrase and len(word) <= 2 and word not in TECH_KEYWORDS:
            return False
        if word not in self.priorities:
            self.priorities[word] = priority
            self.keywords.append(word)
        if word not in bucket:
            bucket.append(word)
        return True


def extract_keywords(job_description: str, count: int | None = None) -> ExtractedKeywords:
    """Extract up to ``count`` keywords from a JD in priority order.

    ``count`` of None or 0 uses ``calculate_dynamic_keyword_count``.
    """
    if not count or count <= 0:
        count = calculate_dynamic_keyword_count(job_description)

    collector = _KeywordCollector()
    from_title: list[str] = []
    from_required: list[str] = []
    from_nice_to_have: list[str] = []
    technologies: list[str] = []
    action_verbs: list[str] = []

    all_tokens = tokenize_with_phrases(job_description)
    frequency = Counter(t for t in all_tokens if t not in STOPWORDS)

    title = extract_job_title(job_description)
    if title:
        for word in tokenize_with_phrases(title):
            collector.add(word, from_title, "title")

    sections = parse_jd_sections(job_description)
    section_buckets: list[tuple[str, list[str], KeywordPriority]] = [
        ("required", from_required, "required"),
        ("responsibilities", from_required, "responsibilities"),
        ("nice_to_have", from_nice_to_have, "nice_to_have"),
    ]
    for section_type, bucket, priority in section_buckets:
        for section in sections:
            if section.type != section_type:
                continue
            for word in tokenize_with_phrases(section.content):
                if word in TECH_KEYWORDS:
                    collector.add(word, technologies, priority)
                collector.add(word, bucket, priority)

    for word in all_tokens:
        if word in TECH_KEYWORDS:
            collector.add(word, technologies, "general")
    for word in all_tokens:
        if word in ACTION_VERBS:
            collector.add(word, action_verbs, "general")

    # Filler: remaining terms by TF-IDF weight, ties in order of appearance
    weights = tfidf_term_weights(job_description, tokenize_with_phrases)
    first_seen: dict[str, int] = {}
    for i, token in enumerate(all_tokens):
        first_seen.setdefault(token, i)
    filler = [t for t in first_seen if t not in collector.priorities]
    filler.sort(key=lambda t: (-weights.get(t, 0.0), first_seen[t]))
    for word in filler:
        if len(collector.keywords) >= count:
            break
        collector.add(word, [], "general")

    keywords = collector.keywords[:count]
    logger.debug("Extracted %d keywords (limit %d) from JD", len(keywords), count)

    return ExtractedKeywords(
        all=keywords,
        from_title=from_title,
        from_required=from_required,
        from_nice_to_have=from_nice_to_have,
        technologies=technologies,
        action_verbs=action_verbs,
        keyword_priorities={kw: collector.priorities[kw] for kw in keywords},
        keyword_frequency={kw: frequency.get(kw, 1) for kw in keywords},
    )


def _synonyms_for(keyword: str) -> list[str]:
    """Direct variants plus canonical terms (and their variants) listing ``keyword``."""
    candidates = list(SKILL_SYNONYMS.get(keyword, []))
    for canonical in SYNONYM_REVERSE_INDEX.get(keyword, []):
        candidates.append(canonical)
        candidates.extend(s for s in SKILL_SYNONYMS[canonical] if s != keyword)
    return list(dict.fromkeys(candidates))


def _match_one(
    keyword: str,
    resume_text: str,
    resume_tokens: list[str],
    resume_stems: set[str],
    fuzzy_threshold: int,
) -> KeywordMatch | None:
    if keyword_in_text(resume_text, keyword):
        return KeywordMatch(keyword=keyword, match_type="exact")

    is_phrase = " " in keyword
    if not is_phrase:
        keyword_stem = stem_word(keyword)
        if keyword_stem in resume_stems:
            return KeywordMatch(keyword=keyword, match_type="stem", matched_as=keyword_stem)

    for synonym in _synonyms_for(keyword):
        if keyword_in_text(resume_text, synonym):
            return KeywordMatch(keyword=keyword, match_type="synonym", matched_as=synonym)

    if not is_phrase and len(keyword) >= _FUZZY_MIN_LENGTH and fuzzy_threshold < 100:
        for token in resume_tokens:
            if len(token) >= _FUZZY_MIN_LENGTH and fuzz.ratio(keyword, token) >= fuzzy_threshold:
                return KeywordMatch(keyword=keyword, match_type="fuzzy", matched_as=token)

    return None


def match_keywords(
    keywords: list[str],
    resume_text: str,
    fuzzy_threshold: int | None = None,
) -> tuple[list[str], list[str], list[KeywordMatch]]:
    """Partition JD keywords into (matched, missing, match details).

    Order follows ``keywords``; repeated keywords are considered once.
    """
    if fuzzy_threshold is None:
        fuzzy_threshold = settings.fuzzy_match_threshold

    resume_tokens = list(dict.fromkeys(tokenize(resume_text)))
    resume_stems = {stem_word(t) for t in resume_tokens}

    matched: list[str] = []
    missing: list[str] = []
    details: list[KeywordMatch] = []
    seen: set[str] = set()

    for raw in keywords:
        keyword = raw.lower().strip()
        if not keyword or keyword in seen:
            continue
        seen.add(keyword)

        detail = _match_one(keyword, resume_text, resume_tokens, resume_stems, fuzzy_threshold)
        if detail is None:
            missing.append(keyword)
        else:
            matched.append(keyword)
            details.append(detail)

    return matched, missing, details


def calculate_match_rate(matched: int, total: int) -> float:
    """Percentage of keywords matched, one decimal."""
    if total == 0:
        return 0.0
    return round_half_up(matched / total * 100, 1)


def calculate_keyword_density(matched_count: int, total_words: int) -> float:
    """Unique matched keywords per hundred resume words, one decimal, 0-100."""
    if total_words == 0:
        return 0.0
    return sanitize_score_value(round_half_up(matched_count / total_words * 100, 1), 0, 100)


def calculate_actual_keyword_density(
    resume_text: str,
    matched_keywords: list[str],
    stuffing_threshold: int | None = None,
) -> dict:
    """Occurrence-based density with keyword stuffing detection.

    Counts every boundary-aware occurrence of each matched keyword; keywords
    appearing ``stuffing_threshold`` times or more are flagged.
    """
    if stuffing_threshold is None:
        stuffing_threshold = settings.stuffing_threshold

    total_words = word_count(resume_text)
    if total_words == 0 or not matched_keywords:
        return {"overall_density": 0.0, "stuffed_keywords": [], "total_occurrences": 0}

    total_occurrences = 0
    stuffed: list[str] = []
    for keyword in matched_keywords:
        count = count_keyword_occurrences(resume_text, keyword)
        total_occurrences += count
        if count >= stuffing_threshold:
            stuffed.append(keyword)

    overall = sanitize_score_value(round_half_up(total_occurrences / total_words * 100, 1), 0, 100)
    return {
        "overall_density": overall,
        "stuffed_keywords": stuffed,
        "total_occurrences": total_occurrences,
    }
