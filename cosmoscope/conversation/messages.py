"""
Localized assistant messages.

Every user-visible string the engine appends to a transcript lives here,
keyed by message id and language.
"""

from typing import Dict, List

from cosmoscope.shared.schemas import ChatContext


MESSAGES: Dict[str, Dict[str, str]] = {
    "earth_welcome": {
        "en": "Welcome to the Earth Explorer! Attempting to find your location...",
        "bn": "আর্থ এক্সপ্লোরারে স্বাগতম! আপনার অবস্থান খোঁজার চেষ্টা করা হচ্ছে...",
    },
    "mars_welcome": {
        "en": "Greetings! I am the Mars Exploration AI. Ask me anything about the Red Planet.",
        "bn": "শুভেচ্ছা! আমি মঙ্গল অন্বেষণ এআই। আমাকে লাল গ্রহ সম্পর্কে কিছু জিজ্ঞাসা করুন।",
    },
    "located": {
        "en": "Your location has been found! Click the map or ask me anything to learn more.",
        "bn": "আপনার অবস্থান পাওয়া গেছে! আরও জানতে মানচিত্রে ক্লিক করুন বা আমাকে কিছু জিজ্ঞাসা করুন।",
    },
    "not_located": {
        "en": "Could not access your location. Defaulting to Rome. Click the map to explore!",
        "bn": "আপনার অবস্থান অ্যাক্সেস করা যায়নি। রোম থেকে শুরু হচ্ছে। অন্বেষণ করতে মানচিত্রে ক্লিক করুন!",
    },
    "select_location_first": {
        "en": "Please select a location on the map before asking a question.",
        "bn": "অনুগ্রহ করে একটি প্রশ্ন জিজ্ঞাসা করার আগে মানচিত্রে একটি অবস্থান নির্বাচন করুন।",
    },
    "location_selected": {
        "en": "Location selected: {name}",
        "bn": "অবস্থান নির্বাচিত: {name}",
    },
    "set_location_confirmed": {
        "en": "Of course, here is {name}.",
        "bn": "অবশ্যই, এখানে {name}।",
    },
    "show_route_confirmed": {
        "en": "Showing the route from {start} to {end}. The approximate distance is {distance}.",
        "bn": "{start} থেকে {end} পর্যন্ত রুট দেখানো হচ্ছে। আনুমানিক দূরত্ব {distance}।",
    },
    "earth_connection_failed": {
        "en": "There seems to be a connection issue. Please try again.",
        "bn": "সংযোগ একটি সমস্যা আছে বলে মনে হচ্ছে। অনুগ্রহ করে আবার চেষ্টা করুন।",
    },
    "mars_connection_failed": {
        "en": "I seem to be having trouble communicating from Mars. Please try again.",
        "bn": "মঙ্গল গ্রহ থেকে সংযোগ করতে আমার সমস্যা হচ্ছে। অনুগ্রহ করে আবার চেষ্টা করুন।",
    },
    "image_failed": {
        "en": "An error occurred while analyzing the image. Please try again.",
        "bn": "ছবিটি বিশ্লেষণ করার সময় একটি ত্রুটি ঘটেছে। অনুগ্রহ করে আবার চেষ্টা করুন।",
    },
    "story_failed": {
        "en": "The rover could not tell its story right now. Please try again.",
        "bn": "রোভারটি এখন তার গল্প বলতে পারছে না। অনুগ্রহ করে আবার চেষ্টা করুন।",
    },
}

DEFAULT_SUGGESTIONS: Dict[str, Dict[str, List[str]]] = {
    "earth": {
        "en": [
            "Where am I right now?",
            "What's the weather like here?",
            "Find a park nearby",
        ],
        "bn": [
            "আমি এখন কোথায়?",
            "এখানকার আবহাওয়া কেমন?",
            "কাছাকাছি একটি পার্ক খুঁজুন",
        ],
    },
    "mars": {
        "en": [
            "Tell me about the Curiosity rover",
            "What is a 'Sol' on Mars?",
            "Where is Olympus Mons?",
        ],
        "bn": [
            "কিউরিওসিটি রোভার সম্পর্কে বলুন",
            "মঙ্গলে 'সল' কী?",
            "অলিম্পাস মনস কোথায়?",
        ],
    },
}


def localize(message_id: str, language: str, **values: str) -> str:
    """Look up a message in ``language`` (English fallback) and fill it in."""
    table = MESSAGES[message_id]
    template = table.get(language, table["en"])
    return template.format(**values) if values else template


def welcome_texts(context: ChatContext) -> List[str]:
    """Every translation of a context's welcome message."""
    return list(MESSAGES[f"{context}_welcome"].values())


def default_suggestions(context: ChatContext, language: str) -> List[str]:
    table = DEFAULT_SUGGESTIONS[context]
    return list(table.get(language, table["en"]))
