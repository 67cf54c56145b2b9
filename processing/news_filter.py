"""Layer 1: Junk filter and topic classification for news articles"""

# Checked in order; the first category with a keyword hit wins, so the
# more specific topics come first and the catch-all 사회 comes last.
TOPIC_KEYWORDS = [
    ('과학', [
        "과학", "연구", "발견", "실험", "연구소", "과학자", "논문", "발표",
        "science", "research", "study", "discovery", "experiment",
    ]),
    ('정치', [
        "정치", "선거", "정책", "국회", "정부", "대통령", "총리", "의원", "여당", "야당",
        "politics", "election", "government", "parliament", "president",
    ]),
    ('경제', [
        "경제", "기업", "금융", "주식", "증시", "코스피", "코스닥", "은행", "투자", "경기",
        "economy", "economic", "finance", "stock", "market", "business", "company",
    ]),
    ('스포츠', [
        "스포츠", "선수", "대회", "올림픽", "월드컵", "축구", "야구", "농구", "골프",
        "sports", "sport", "match", "player", "olympic", "world cup",
    ]),
    ('기술', [
        "기술", "디지털", "소프트웨어", "인공지능", "빅데이터", "클라우드", "스마트폰",
        "tech", "technology", "digital", "software", "artificial intelligence", "cloud",
    ]),
    ('건강', [
        "건강", "의료", "질병", "병원", "의사", "치료", "백신", "코로나", "감염",
        "health", "medical", "hospital", "doctor", "disease", "treatment", "medicine",
    ]),
    ('환경', [
        "환경", "기후", "생태", "탄소", "온실가스", "재생에너지", "친환경", "기후변화",
        "climate", "environment", "carbon", "renewable",
    ]),
    ('문화', [
        "문화", "예술", "엔터테인먼트", "영화", "드라마", "음악", "공연", "전시", "박물관", "축제",
        "culture", "art", "entertainment", "movie", "music", "concert", "exhibition", "festival",
    ]),
    ('국제', [
        "국제", "외교", "해외", "국제관계", "외교부", "대사관", "국제기구", "유엔", "nato",
        "international", "diplomacy", "foreign", "global",
    ]),
    ('사회', [
        "사회", "사건", "사고", "인물", "범죄", "교통사고", "화재", "재난", "구조", "소방",
        "society", "social", "incident", "accident", "crime", "disaster",
    ]),
]


def is_obvious_junk(article):
    """An article without a text title or original link cannot be stored"""
    title = article.get('title')
    link = article.get('original_link')
    if not isinstance(title, str) or not isinstance(link, str):
        return True
    return not title.strip() or not link.strip()


def classify_news_category(title, content=""):
    """Keyword topic classification; None when nothing matches"""
    text = f"{title or ''} {content or ''}".lower()
    for category, keywords in TOPIC_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category
    return None


def filter_news(articles):
    """Drop junk articles and tag the rest with a topic category.

    Kept articles are the caller's own dicts: a missing `news_category`
    is set on them in place.
    """
    filtered = []
    stats = {'filtered_junk': 0, 'kept': 0}

    for article in articles:
        if is_obvious_junk(article):
            stats['filtered_junk'] += 1
            continue

        if not article.get('news_category'):
            article['news_category'] = classify_news_category(
                article.get('title', ''), article.get('content', '')
            )
        stats['kept'] += 1
        filtered.append(article)

    return filtered, stats
