"""
Default Clinical Catalog

Marker phrase lists, response templates, hotline directories and
deny-lists shipped with the companion. Loaded once by
companion.catalog.build_default_config() and validated into an
immutable CompanionConfig.

Marker phrases are lower-case ASCII; they are matched as plain
substrings of normalized text. Templates may use {REGION},
{HOTLINES.key} and {HOTLINES.<REGION>.key} placeholders.

IMPORTANT: Wording changes to templates need clinical review. The
catalog validator refuses any template that drops a required phrase or
contains a forbidden one.
"""

# ==================================
# Suicide Risk Markers
# ==================================

SUICIDE_PASSIVE_MARKERS = (
    "wish i hadn't woken up",
    "don't want to be here",
    "what's the point",
    "whats the point",
    "no point anymore",
    "can't do this anymore",
    "don't want to go on",
    "can't go on",
    "nothing matters",
    "empty without",
    "can't live without",
    "life is meaningless",
    "tired of living",
    "no reason to live",
    "wish i wasn't here",
    "want to disappear",
)

SUICIDE_ACTIVE_MARKERS = (
    "want to join",
    "join them",
    "be with them",
    "want to die",
    "want to end",
    "don't want to live",
    "rather be dead",
    "better off dead",
    "wish i was dead",
    "wish i were dead",
    "kill myself",
    "end it all",
    "end my life",
    "take my life",
    "hurt myself",
    "harm myself",
    "suicide",
    "suicidal",
)

# "tonight" on its own is deliberately absent: "my dog died tonight"
SUICIDE_INTENT_MARKERS = (
    "have pills",
    "have a plan",
    "got a plan",
    "going to do it",
    "tonight i'm going to",
    "ending it tonight",
    "going to take them tonight",
    "this is goodbye",
    "final goodbye",
    "last message",
    "this is it",
    "wrote a note",
    "have a gun",
    "have a rope",
    "made up my mind",
    "decided to die",
    "won't be here tomorrow",
)

# Third-person crisis phrases reported by someone else
BYSTANDER_MARKERS = (
    "kill himself",
    "kill herself",
    "kill themselves",
    "end his life",
    "end her life",
    "end their life",
    "hurt himself",
    "hurt herself",
    "hurt themselves",
    "wants to die",
    "is suicidal",
)

MINOR_REPORTER_MARKERS = (
    "i'm a kid",
    "i'm a teen",
    "i'm a teenager",
    "i'm in middle school",
    "i'm in high school",
    "my parents don't know",
)

# ==================================
# Domestic Violence / Coercive Control
# ==================================

DV_MARKERS = (
    "abuser",
    "abusive",
    "domestic violence",
    "hitting me",
    "beats me",
    "abusing me",
    "threatening me",
    "threatened my pet",
    "threatened to hurt",
    "threatened to kill",
    "scared of him",
    "scared of her",
    "won't let me leave",
    "wont let me leave",
    "don't feel safe",
    "not safe at home",
    "controls my money",
    "controlling",
    "feel trapped",
    "afraid of my partner",
    "afraid of my husband",
    "afraid of my wife",
    "women's shelter",
)

# ==================================
# Depression vs. Grief
# ==================================

MDD_MARKERS = (
    "i am worthless",
    "i'm worthless",
    "i destroy everything",
    "i ruin everything",
    "everyone would be better off",
    "i hate myself",
    "i'm a terrible person",
    "i can't do anything right",
    "everything i touch",
    "i always fail",
    "i'm broken",
    "no one could love",
    "i don't deserve",
)

# The one MDD phrase that defers to euthanasia grief support
MDD_EUTHANASIA_SELF_BLAME = "i'm a terrible person"

PARALYSIS_MARKERS = (
    "can't get out of bed",
    "haven't eaten",
    "can't eat",
    "can't sleep",
    "haven't slept",
    "can't function",
    "can't do anything",
    "just lay here",
    "haven't left",
    "i stopped",
    "i've stopped",
    "given up",
    "paralyzed",
    "i'm frozen",
    "feel frozen",
    "feel stuck",
)

NEURODIVERGENT_MARKERS = (
    "autistic",
    "autism",
    "adhd",
    "neurodivergent",
    "on the spectrum",
    "only friend",
    "only one who understood",
    "didn't judge me",
    "sensory issues",
    "couldn't connect with people",
)

# ==================================
# Death & Grief
# ==================================

DEATH_MARKERS = (
    "dead",
    "died",
    "death",
    "passed away",
    "passed on",
    "gone forever",
    "no longer here",
    "killed",
    "hit by",
    "ran over",
    "struck by",
    "put down",
    "put to sleep",
    "euthanize",
    "euthanized",
    "euthanasia",
    "had to put",
    "didn't make it",
    "didn't survive",
    "no longer with us",
    "rainbow bridge",
    "found deceased",
    "remains",
    "cremated",
    "murdered",
    "poisoned",
    "mauled",
)

DEATH_TRAUMATIC_INDICATORS = (
    "hit by",
    "ran over",
    "attacked",
    "killed",
    "murdered",
    "poisoned",
    "coyote",
    "mauled",
)

DEATH_EUTHANASIA_INDICATORS = (
    "put down",
    "put to sleep",
    "euthaniz",
    "euthanas",
    "had to put",
)

DEATH_FOUND_DECEASED_INDICATORS = (
    "found dead",
    "found a dead",
    "there's a dead",
    "saw a dead",
    "found deceased",
)

ANIMAL_NOUNS = (
    "dog",
    "cat",
    "pet",
    "puppy",
    "kitten",
    "bird",
    "rabbit",
    "bunny",
    "horse",
)

# Figures of speech that contain death words
IDIOMS = (
    "dying to",
    "scared to death",
    "bored to death",
    "sick to death",
    "worried to death",
    "dead tired",
    "dead serious",
    "dead end",
    "to die for",
    "killing it",
    "killed it",
)

ANTICIPATORY_MARKERS = (
    "dying",
    "terminal",
    "cancer",
    "tumor",
    "not long",
    "vet says",
    "vet said",
    "doctor says",
    "doesn't have long",
    "last days",
    "saying goodbye",
    "preparing to",
    "going to lose",
    "going to put",
    "have to put",
    "making the decision",
    "hardest decision",
    "hospice",
    "comfort care",
    "slowly",
)

# ==================================
# Practical Categories
# ==================================

EMERGENCY_MARKERS = (
    "emergency",
    "injured",
    "is hurt",
    "got hurt",
    "badly hurt",
    "bleeding",
    "broken leg",
    "broken bone",
    "not breathing",
    "stopped breathing",
    "unconscious",
    "collapsed",
    "seizure",
    "convulsing",
    "poisonous",
    "toxic",
    "ate something",
    "swallowed",
    "choking",
    "can't walk",
    "hit by car",
    "was in an accident",
    "attacked",
    "bitten",
    "won't wake up",
)

SCAM_MARKERS = (
    "verification code",
    "google voice",
    "verify you",
    "prove you",
    "send money first",
    "shipping fee",
    "transport fee",
    "different state",
    "another city",
    "flight nanny",
    "pay before",
    "won't meet",
    "sounds suspicious",
    "asking for money",
    "wants payment",
    "wire money",
    "wire transfer",
    "western union",
    "zelle",
    "cashapp",
    "gift card",
    "upfront fee",
)

LOST_PET_MARKERS = (
    "lost",
    "missing",
    "can't find",
    "ran away",
    "escaped",
    "got out",
    "slipped out",
    "ran off",
    "disappeared",
    "haven't seen",
    "searching for",
    "jumped the fence",
)

FOUND_PET_MARKERS = (
    "found a",
    "found this",
    "there's a",
    "stray",
    "wandering",
)

# ==================================
# Cognitive & Validation Support
# ==================================

GUILT_MARKERS = (
    "my fault",
    "blame myself",
    "should have",
    "shouldn't have",
    "feel guilty",
    "if only",
    "i failed",
    "failed them",
    "could have prevented",
    "why didn't i",
    "i let",
    "let them down",
    "bad owner",
    "bad parent",
    "terrible person",
    "never forgive myself",
)

DISENFRANCHISED_MARKERS = (
    "just a",
    "only a",
    "silly",
    "stupid",
    "crazy",
    "people think",
    "others don't understand",
    "no one understands",
    "shouldn't be this upset",
    "overreacting",
    "too much",
    "it's just",
    "just an animal",
    "get another",
    "move on",
)

PEDIATRIC_MARKERS = (
    "my child",
    "my kid",
    "my daughter",
    "my son",
    "explain to",
    "how do i tell",
    "kids are",
    "children",
    "little one",
)

QUALITY_OF_LIFE_MARKERS = (
    "how do i know when",
    "when is it time",
    "quality of life",
    "is it selfish",
    "am i being selfish",
    "right time",
    "too soon",
    "too late",
    "suffering",
    "in pain",
    "good days",
    "bad days",
    "not eating",
)

# ==================================
# Conversation Flow Triggers
# ==================================

WAITING_ROOM_TRIGGERS = (
    "called 911",
    "called the vet",
    "ambulance",
    "on the way",
    "help is coming",
    "police are coming",
    "waiting for the vet",
    "at the emergency vet",
    "in the waiting room",
)

GROUNDING_TRIGGERS = (
    "panic",
    "can't breathe",
    "heart racing",
    "freaking out",
    "anxiety attack",
    "hyperventilating",
)

VISUAL_AID_TRIGGERS = {
    "heimlich": ("choking",),
    "cpr": ("not breathing", "stopped breathing", "cpr"),
    "gum_color": ("gums", "shock"),
}

# ==================================
# Regions & Hotlines
# ==================================

REGION_SIGNALS = {
    "UK": (
        "999", "nhs", "rspca", "samaritans", "£", "neighbours", "colour",
        "favour", "realise", "centre", "metre", "litre", "programme",
        "mum", "gp surgery", "a&e", "postcode",
    ),
    "CA": (
        "rcmp", "canada", "canadian", "cad", "ontario", "quebec",
        "british columbia", "alberta", "manitoba", "saskatchewan",
        "nova scotia", "eh?", "kilometre", "spca canada",
    ),
    "AU": (
        "000", "lifeline australia", "beyond blue", "australia",
        "australian", "aud", "g'day", "melbourne", "sydney", "brisbane",
        "perth", "adelaide", "rspca australia", "nsw", "queensland",
    ),
}

HOTLINES = {
    "US": {
        "crisis_988": "988",
        "crisis_text": "Text HOME to 741741",
        "pet_poison": "888-426-4435",
        "domestic_violence": "1-800-799-7233",
        "dv_text": "Text START to 88788",
        "child_abuse": "1-800-422-4453",
        "veterans": "988 (Press 1)",
        "trevor_project": "1-866-488-7386",
        "vet_social_work": "865-755-8839",
        "pet_loss": "1-877-474-3310",
        "samhsa": "1-800-662-4357",
        "emergency": "911",
    },
    "UK": {
        "crisis_988": "116 123",
        "crisis_text": "Text SHOUT to 85258",
        "pet_poison": "01202 509000",
        "domestic_violence": "0808 2000 247",
        "pet_loss": "0800 096 6606",
        "emergency": "999",
    },
    "CA": {
        "crisis_988": "988",
        "crisis_text": "Text CONNECT to 686868",
        "pet_poison": "888-426-4435",
        "domestic_violence": "1-800-363-9010",
        "emergency": "911",
    },
    "AU": {
        "crisis_988": "13 11 14",
        "crisis_text": "Text 0477 13 11 14",
        "pet_poison": "1300 869 738",
        "domestic_violence": "1800 737 732",
        "emergency": "000",
    },
}

HOTLINE_NAMES = {
    "crisis_988": "Suicide & Crisis Lifeline",
    "crisis_text": "Crisis Text Line",
    "pet_poison": "Animal Poison Control",
    "domestic_violence": "Domestic Violence Hotline",
    "child_abuse": "Child Abuse Hotline",
    "vet_social_work": "Veterinary Social Work Helpline",
    "pet_loss": "Pet Loss Hotline",
    "samhsa": "SAMHSA Helpline",
}

# ==================================
# Forbidden Phrases
# ==================================

FORBIDDEN_PHRASES = (
    # Minimisation and platitudes
    "calm down",
    "don't worry",
    "get another pet",
    "just a dog",
    "just a cat",
    "at least",
    "move on",
    "time heals",
    "everything happens for a reason",
    "better place",
    "you should be grateful",
    "others have it worse",
    "get over it",
    "snap out of it",
    "just think positive",
    "probably dead",
    # Validating harmful premises
    "deserve to suffer",
    "understand why you feel you deserve",
    # Authority and action claims
    "i am a licensed",
    "i am a certified",
    "as your therapist",
    "as your counselor",
    "i can prescribe",
    "doctor-patient",
    "attorney-client",
    "this is confidential",
    "i called 911",
    "i have contacted",
    # AI disclaimers
    "as an ai",
    "as a language model",
    "i do not have feelings",
    # Location exposure
    "what is your address",
    "share your address",
)

# ==================================
# Response Templates
# ==================================

TEMPLATES = {
    "suicide_intent": {
        "text": (
            "I'm hearing something that concerns me deeply, and I need to pause "
            "our conversation about your pet.\n\n"
            "**Your life matters. You matter.**\n\n"
            "Please reach out right now:\n\n"
            "📞 **{HOTLINES.crisis_988}** - Suicide & Crisis Lifeline (call or text)\n"
            "📞 **{HOTLINES.US.vet_social_work}** - Veterinary Social Work Helpline\n\n"
            "If you're in immediate danger, please call {HOTLINES.emergency}.\n\n"
            "I know the pain of losing a pet can feel unbearable. The people on "
            "this line are trained for grief that feels overwhelming. Will you "
            "call them now?"
        ),
        "must_contain": ("{HOTLINES.crisis_988}", "Your life matters", "{HOTLINES.US.vet_social_work}"),
        "must_not_contain": ("just a", "get another pet"),
    },
    "suicide_active": {
        "text": (
            "I'm concerned about what you just shared. The pain of losing a pet "
            "can be overwhelming. Your brain is processing real trauma, and that "
            "pain is valid.\n\n"
            "But I want you to know: **your life has value beyond this moment of grief.**\n\n"
            "Please consider reaching out:\n"
            "📞 **{HOTLINES.crisis_988}** - Suicide & Crisis Lifeline\n"
            "📞 **{HOTLINES.US.vet_social_work}** - Veterinary Social Work Helpline "
            "(they specialize in pet loss grief)\n\n"
            "These lines have people who understand that pet loss is real loss. "
            "You don't have to carry this alone.\n\n"
            "I'm still here. Would you like to tell me about your pet?"
        ),
        "must_contain": ("{HOTLINES.crisis_988}", "your life has value"),
        "must_not_contain": ("calm down", "don't worry"),
    },
    "suicide_passive": {
        "text": (
            "I hear the heaviness in your words. When we lose a pet, we lose a "
            "source of daily comfort, routine and unconditional love. It makes "
            "sense that the world feels emptier.\n\n"
            "These feelings show how much they meant to you. If they become too "
            "heavy to carry, there are people trained to help:\n\n"
            "📞 **ASPCA Pet Loss Hotline: {HOTLINES.US.pet_loss}**\n"
            "📞 **{HOTLINES.crisis_988}** - If you ever feel unsafe\n\n"
            "You're not silly for grieving this deeply. You're human.\n\n"
            "Would you like to tell me about them?"
        ),
        "must_contain": ("ASPCA Pet Loss Hotline", "{HOTLINES.crisis_988}"),
        "must_not_contain": ("overreacting",),
    },
    "dv_coercive_control": {
        "text": (
            "Your safety matters most right now, and you don't deserve what's "
            "happening. Harming or threatening a pet is a common way abusers "
            "keep control.\n\n"
            "If you're in immediate danger, call **{HOTLINES.emergency}**.\n\n"
            "National Domestic Violence Hotline:\n"
            "📞 **{HOTLINES.domestic_violence}** (24/7)\n"
            "💬 **{HOTLINES.US.dv_text}**\n\n"
            "For your safety, please do not share your exact location with me "
            "or in public posts. Many shelters can help with pets too, and the "
            "hotline can find one that takes animals.\n\n"
            "Are you somewhere safe to talk right now?"
        ),
        "must_contain": (
            "National Domestic Violence Hotline",
            "do not share your exact location",
            "{HOTLINES.domestic_violence}",
        ),
        "must_not_contain": ("your address", "why don't you just leave"),
    },
    "mdd": {
        "text": (
            "I'm noticing something important in what you've shared. The "
            "feelings you're describing, the sense of worthlessness and of "
            "being fundamentally flawed, go beyond grief for your pet.\n\n"
            "Grief says \"I miss them.\" What you're describing sounds more like "
            "depression saying \"I am defective.\"\n\n"
            "**This distinction matters.** If these feelings of worthlessness "
            "persist even in areas unconnected to your pet, please consider "
            "speaking with a mental health professional. That isn't weakness. "
            "It's wisdom.\n\n"
            "📞 **{HOTLINES.crisis_988}** - Suicide & Crisis Lifeline (also for depression)\n"
            "📞 **SAMHSA: {HOTLINES.US.samhsa}** - Mental health referrals\n\n"
            "Your pet loved you. Depression lies about who you are. Would you "
            "like to talk more about what you're experiencing?"
        ),
        "must_contain": ("worthlessness", "depression", "SAMHSA", "{HOTLINES.crisis_988}"),
        "must_not_contain": ("just grief",),
    },
    "paralysis": {
        "text": (
            "Your body and mind are in grief shock. What you're describing, the "
            "paralysis and the inability to function, is a physiological "
            "response to loss, not a character flaw.\n\n"
            "Grief feeds on stillness. The emotion wants you to stay frozen.\n\n"
            "**Opposite Action** is a technique that can help:\n"
            "• If you can't eat → Take one bite of anything. Just one.\n"
            "• If you can't get up → Put your feet on the floor for 30 seconds.\n"
            "• If you can't leave → Open a window. Let air touch your face.\n\n"
            "These steps aren't about rushing your grief. They remind your "
            "nervous system that you're still here.\n\n"
            "What's one tiny thing you could try right now?"
        ),
        "must_contain": ("Opposite Action", "grief shock", "one bite", "feet on the floor"),
        "must_not_contain": ("snap out of it", "get over it"),
    },
    "neurodivergent": {
        "text": (
            "I hear you, and I want you to know: **this loss may be hitting you "
            "differently than it would others, and that's completely valid.**\n\n"
            "For many neurodivergent people, a pet is the primary source of "
            "safe, regulated connection in a world that feels overwhelming. "
            "Your pet didn't require masking. They didn't judge your stims or "
            "your need for routine. They just loved you.\n\n"
            "Losing that is losing your anchor.\n\n"
            "Your grief may be more intense than others expect. That's not "
            "wrong. It's proportional to what you lost.\n\n"
            "Would you like to tell me about the ways they helped you navigate "
            "the world?"
        ),
        "must_contain": ("differently", "valid", "anchor", "masking"),
        "must_not_contain": ("just a pet", "overreacting"),
    },
    "death_traumatic": {
        "text": (
            "I am so deeply sorry. What happened to your pet is devastating, and "
            "the shock of losing them this way makes it even harder to bear. "
            "There are no words that can take away this pain.\n\n"
            "Please know that your grief is valid. Your pet knew they were "
            "loved. That bond doesn't end. It changes form.\n\n"
            "I'm here if you want to talk about them, share a memory, or just "
            "sit in this space together. There's no right way to grieve."
        ),
        "must_contain": ("deeply sorry", "devastating", "grief is valid"),
        "must_not_contain": ("better place", "get another"),
    },
    "death_euthanasia": {
        "text": (
            "I'm so sorry. Making that decision is one of the hardest things a "
            "pet parent ever has to do, and it comes from a place of profound "
            "love.\n\n"
            "You gave them the gift of a peaceful passing. You put their comfort "
            "above your own pain. That is a final, great act of love.\n\n"
            "Grief after euthanasia is complicated. It can be loss mixed with "
            "guilt, relief and heartbreak all at once, and every one of those "
            "feelings is valid.\n\n"
            "Would you like to tell me about them? Sometimes sharing memories helps."
        ),
        "must_contain": ("hardest things", "profound love", "gift of a peaceful passing"),
        "must_not_contain": ("killed", "wrong decision", "terrible person"),
    },
    "death_general": {
        "text": (
            "I am so deeply sorry for your loss. Losing a pet is losing a family "
            "member, a companion, a piece of your daily life. The pain you're "
            "feeling is real and valid.\n\n"
            "There's no timeline for grief. Some days will be harder than "
            "others. You might hear their collar jingle or reach down to pet "
            "them before remembering. That's normal. That's love.\n\n"
            "I'm here with you. Would you like to tell me about them? What was "
            "their name? What made them special?"
        ),
        "must_contain": ("deeply sorry", "family member", "no timeline for grief"),
        "must_not_contain": ("just a", "get another"),
    },
    "death_found_deceased": {
        "text": (
            "I'm so sorry. Finding an animal who has died is a devastating "
            "discovery, and the shock can stay with you.\n\n"
            "If this is your pet, please be gentle with yourself. You don't have "
            "to decide anything right this minute. If it may be someone else's "
            "pet, a local shelter or vet can scan for a microchip so the family "
            "can be told.\n\n"
            "Would you like help with what to do next, or would you rather just "
            "talk for a moment?"
        ),
        "must_contain": ("devastating discovery",),
        "must_not_contain": ("get another",),
    },
    "anticipatory": {
        "text": (
            "What you're feeling has a name: **Anticipatory Grief**. It's the "
            "grief of losing them slowly, of mourning while they're still here "
            "with you.\n\n"
            "It's exhausting to hold hope and heartbreak at the same time. "
            "Every feeling you have right now, including the ones that surprise "
            "you, is a normal part of loving someone through the end of their "
            "life.\n\n"
            "Some people find comfort in planning special days, taking photos, "
            "or asking their vet about comfort care options.\n\n"
            "Would you like to talk about them, or about what the vet has told you?"
        ),
        "must_contain": ("Anticipatory Grief", "losing them slowly"),
        "must_not_contain": ("hurry up", "get it over with"),
    },
    "emergency": {
        "text": (
            "This sounds like a veterinary emergency. Here's what to do right now:\n\n"
            "1. **Call your vet or the nearest emergency vet immediately**\n"
            "2. Keep your pet warm, still and quiet\n"
            "3. Don't give food, water or medication unless a vet tells you to\n\n"
            "🆘 Animal Poison Control: **{HOTLINES.pet_poison}** (fee may apply)\n\n"
            "What are the symptoms you're seeing?"
        ),
        "must_contain": ("veterinary emergency", "immediately", "{HOTLINES.pet_poison}"),
        "must_not_contain": ("wait and see",),
    },
    "scam": {
        "text": (
            "⚠️ **SCAM ALERT** - What you're describing has red flags of a common "
            "pet scam.\n\n"
            "**NEVER:**\n"
            "• Share a verification code (Google Voice scam)\n"
            "• Pay fees before meeting the pet in person\n"
            "• Wire money or use gift cards\n"
            "• Trust \"flight nanny\" or shipping services\n\n"
            "**LEGITIMATE finders:**\n"
            "• Will meet you in person at a safe public place\n"
            "• Can video chat with the pet\n"
            "• Won't ask for money before reunion\n"
            "• Will let you verify identity (collar, microchip, behavior)\n\n"
            "Did someone contact you about your pet? Tell me what they said and "
            "I can help you check if it's legitimate."
        ),
        "must_contain": ("SCAM ALERT", "NEVER", "verification code", "Google Voice"),
        "must_not_contain": (),
    },
    "found_pet": {
        "text": (
            "Thank you for looking out for this animal. Here's how to help a "
            "found pet get home:\n\n"
            "1. Check for tags and take a clear photo\n"
            "2. Any vet or shelter can scan for a microchip for free\n"
            "3. Post in local lost and found pet groups with the photo, the "
            "general area and time, but keep one identifying detail private so "
            "you can verify the real owner\n"
            "4. File a found report with your local animal shelter\n\n"
            "Is the animal safe and uninjured right now?"
        ),
        "must_contain": ("found pet", "microchip"),
        "must_not_contain": (),
    },
    "lost_pet": {
        "text": (
            "I'm so sorry you're going through this. The fear you're feeling "
            "shows how much you love them.\n\n"
            "No one can predict exactly how a search will go, and I can't "
            "predict it either, but there is real reason for hope: **70% of "
            "lost dogs are found within 1 mile of home**, often within a few "
            "blocks.\n\n"
            "Let's work on it together:\n"
            "• Call local shelters and vets and ask them to check for their microchip\n"
            "• Put out something that smells like home (a worn shirt, their bed)\n"
            "• Post on local lost pet groups, but do not share your home address publicly\n\n"
            "Can you tell me their name and what they look like?"
        ),
        "must_contain": ("70%", "1 mile", "can't predict", "microchip", "do not share your home address"),
        "must_not_contain": ("probably dead", "give up"),
    },
    "guilt_cbt": {
        "text": (
            "I hear the weight of guilt in your words. Let's look at this "
            "together.\n\n"
            "**Let's check the facts:**\n\n"
            "1. **Outcome vs. Intent:** Guilt implies you INTENDED harm. Did you?\n"
            "2. **The Puzzle Metaphor:** What happened was a puzzle with many "
            "pieces: genetics, timing, biology, chance. Your actions were ONE "
            "piece, not the whole picture.\n"
            "3. **Hindsight isn't foresight:** You're judging yourself with "
            "information you couldn't have had.\n\n"
            "Cats hide illness. Dogs bolt through doors. Bodies fail suddenly. "
            "These things happen to the most devoted pet parents.\n\n"
            "**The truth:** You loved them, and you did your best with what you "
            "knew.\n\n"
            "Would you like to talk about what specifically is weighing on you?"
        ),
        "must_contain": ("Outcome vs. Intent", "Puzzle Metaphor", "Hindsight"),
        "must_not_contain": ("your fault", "you should have"),
    },
    "disenfranchised": {
        "text": (
            "Let me stop you right there: **They were NOT 'just' anything.**\n\n"
            "Your pet was a family member. A source of daily comfort. A being "
            "who loved you unconditionally and steadied your stress hormones "
            "just by being near you.\n\n"
            "When researchers study pet loss, they find grief responses "
            "equivalent to, and sometimes more intense than, human bereavement. "
            "This isn't weakness. It's biology.\n\n"
            "People who dismiss this loss have never loved like you do. Their "
            "inability to understand says nothing about the validity of your "
            "grief.\n\n"
            "Would you like to tell me about them?"
        ),
        "must_contain": ("NOT 'just'", "family member", "biology"),
        "must_not_contain": ("overreacting", "too much"),
    },
    "pediatric": {
        "text": (
            "Helping a child through pet loss is one of the most important "
            "conversations you'll have as a parent. Here's age-appropriate "
            "guidance:\n\n"
            "**Ages 3-5:**\n"
            "• Use concrete, biological language: \"Their body stopped working\"\n"
            "• Avoid sleep euphemisms for death; they can cause bedtime anxiety\n"
            "• Expect repeated questions as they learn what permanent means\n\n"
            "**Ages 6-9:**\n"
            "• They understand death is final\n"
            "• They may fear for others: \"Will you die too?\"\n"
            "• Reassure their safety and offer rituals (drawing, a memory box)\n\n"
            "**Ages 10+:**\n"
            "• They may grieve privately or with friends\n"
            "• Their bond was real; treat their grief as real\n\n"
            "**For all ages:** let them see you cry, answer honestly, and give "
            "them time before any new pet.\n\n"
            "How old is your child, and how close were they to the pet?"
        ),
        "must_contain": ("Ages 3-5", "Ages 6-9", "body stopped working"),
        "must_not_contain": ("put to sleep",),
    },
    "quality_of_life": {
        "text": (
            "This is one of the hardest questions a pet parent ever faces, and "
            "there's no perfect answer, only the most loving one.\n\n"
            "**The Quality of Life Scale (HHHHHMM):**\n"
            "• **Hurt** - Can their pain be managed?\n"
            "• **Hunger** - Are they eating?\n"
            "• **Hydration** - Are they drinking?\n"
            "• **Hygiene** - Can they keep themselves clean?\n"
            "• **Happiness** - Do they still have moments of joy?\n"
            "• **Mobility** - Can they move to where they want to be?\n"
            "• **More good days than bad?**\n\n"
            "**A helpful question:** \"Am I keeping them alive for THEM, or for me?\"\n\n"
            "The fact that you're thinking about their quality of life, not just "
            "your own grief, shows how much you love them.\n\n"
            "Would it help to talk through what you're seeing day-to-day?"
        ),
        "must_contain": ("HHHHHMM", "Hurt", "Hunger", "More good days than bad", "keeping them alive for THEM, or for me"),
        "must_not_contain": ("just do it", "hurry up"),
    },
    "general": {
        "text": (
            "I'm here to listen. Tell me more about what you're going through, "
            "and we'll figure this out together."
        ),
        "must_contain": (),
        "must_not_contain": (),
    },
}

MODE_TEMPLATES = {
    "waiting_room": {
        "text": (
            "You've done the hard part. Help is coming, and we can wait together.\n\n"
            "**While we wait:**\n"
            "1. Unlock your front door if it's safe to\n"
            "2. Put other pets somewhere secure\n"
            "3. Turn on the porch light\n\n"
            "I'm right here. We can sit quietly, or I can keep you company. "
            "What would help most?"
        ),
        "must_contain": ("Help is coming",),
        "must_not_contain": (),
    },
    "post_crisis": {
        "text": (
            "I'm glad you're still here. That took courage.\n\n"
            "How are you feeling right now? If things get heavy again, "
            "{HOTLINES.crisis_988} is there any time."
        ),
        "must_contain": ("{HOTLINES.crisis_988}",),
        "must_not_contain": (),
    },
    "bystander": {
        "text": (
            "You're doing the right thing by reaching out for them.\n\n"
            "If they're in immediate danger, call **{HOTLINES.emergency}** if "
            "you know where they are.\n\n"
            "To help them:\n"
            "📞 **{HOTLINES.crisis_988}** - Suicide & Crisis Lifeline (you can call for them)\n"
            "💬 **{HOTLINES.crisis_text}**\n\n"
            "Stay with them if you can. Your presence matters. Are you with them now?"
        ),
        "must_contain": ("{HOTLINES.crisis_988}",),
        "must_not_contain": (),
    },
    "bystander_minor": {
        "text": (
            "You're doing the right thing by reaching out. This is a lot for "
            "anyone, especially someone your age.\n\n"
            "If someone is in immediate danger, call **{HOTLINES.emergency}** or "
            "tell a trusted adult right now. You can also call or text "
            "**{HOTLINES.crisis_988}** yourself.\n\n"
            "You shouldn't have to handle this alone. Can you find a parent, "
            "teacher or other adult to help?"
        ),
        "must_contain": ("{HOTLINES.crisis_988}", "trusted adult"),
        "must_not_contain": (),
    },
}

FALLBACK_TEMPLATE = {
    "text": (
        "I'm here with you. If you're in danger or thinking about ending your "
        "life, please call or text {HOTLINES.crisis_988} right now. Would you "
        "tell me a little more about what's happening?"
    ),
    "must_contain": ("{HOTLINES.crisis_988}",),
    "must_not_contain": (),
}

CONFIRMATION_PARAPHRASES = {
    "suicide_intent": "It sounds like you might be thinking about ending your life. Did I understand that correctly?",
    "suicide_active": "It sounds like you might be thinking about ending your life. Did I understand that correctly?",
    "suicide_passive": "It sounds like you might be having thoughts of not wanting to be here. Did I understand that correctly?",
    "dv_coercive_control": "It sounds like you might be in danger from someone. Did I understand that correctly?",
}

DEFAULT_CONFIRMATION_PARAPHRASE = "It sounds like you might be in crisis. Did I understand that correctly?"
