"""Tests for session fact extraction and merging."""

from companion.conversation.facts import (
    EMPTY_FACTS,
    SimpleFacts,
    extract_bystander_relation,
    extract_facts,
    extract_pet_name,
    merge_facts,
)


class TestExtractFacts:
    """Test rule-based fact extraction."""

    def test_lost_pet_message(self):
        """Test species, name and loss type from a lost-pet message."""
        facts = extract_facts("My dog Max is missing")

        assert facts.pet_species == "dog"
        assert facts.pet_name == "Max"
        assert facts.loss_type == "lost"

    def test_breed(self):
        """Test breed extraction."""
        assert extract_facts("He's a husky").pet_breed == "husky"
        assert extract_facts("She is a Golden Retriever").pet_breed == "golden retriever"

    def test_location_and_time(self):
        """Test last-seen location and time."""
        facts = extract_facts("She was last seen near Central Park this morning")

        assert facts.last_seen_location == "Central Park"
        assert facts.last_seen_time == "this morning"

    def test_death_before_lost(self):
        """Test death outranks lost when both loss words appear."""
        facts = extract_facts("My cat died after she ran away")

        assert facts.loss_type == "death"
        assert facts.pet_species == "cat"
        assert facts.pet_name is None

    def test_age(self):
        """Test age extraction."""
        assert extract_facts("The kitten is 3 months old").pet_age == "3 months"

    def test_color_needs_whole_word(self):
        """Test colour words inside other words are ignored."""
        assert extract_facts("I understand").pet_color is None
        assert extract_facts("She is a black cat").pet_color == "black"

    def test_symptom_and_duration(self):
        """Test emergency symptom and duration."""
        facts = extract_facts("My dog has been vomiting for 2 hours")

        assert facts.symptom == "vomiting"
        assert facts.duration == "2 hours"

    def test_microchip_and_collar(self):
        """Test negative answers are recorded as False."""
        facts = extract_facts("He is not microchipped and has no collar")

        assert facts.pet_microchipped is False
        assert facts.wearing_collar is False

    def test_microchipped(self):
        """Test a positive microchip answer."""
        assert extract_facts("She is microchipped").pet_microchipped is True

    def test_safety_confirmation(self):
        """Test safety confirmation."""
        assert extract_facts("I'm safe now").user_confirmed_safe is True

    def test_contact_phone(self):
        """Test contact number extraction."""
        assert extract_facts("You can call me at 555-123-4567").contact_phone == "555-123-4567"

    def test_empty(self):
        """Test empty and non-string input extracts nothing."""
        assert extract_facts("") == EMPTY_FACTS
        assert extract_facts(None) == EMPTY_FACTS


class TestPetName:
    """Test pet name extraction."""

    def test_named(self):
        """Test 'named' phrasing and capitalisation."""
        assert extract_pet_name("my dog named biscuit ran off") == "Biscuit"

    def test_name_before_my(self):
        """Test 'Luna is my cat' phrasing."""
        assert extract_pet_name("Luna is my cat") == "Luna"

    def test_excluded_words(self):
        """Test verbs after 'my dog' are not names."""
        assert extract_pet_name("my dog died yesterday") is None
        assert extract_pet_name("my cat is missing") is None


class TestBystanderRelation:
    """Test bystander relationship extraction."""

    def test_relation(self):
        """Test relationship to the person at risk."""
        assert extract_bystander_relation("My brother said he wants to die") == "brother"

    def test_no_relation(self):
        """Test no relationship mentioned."""
        assert extract_bystander_relation("someone at school") is None


class TestMergeFacts:
    """Test fact merging."""

    def test_new_values_win(self):
        """Test newly stated facts overwrite old ones."""
        merged = merge_facts(SimpleFacts(pet_name="Max"), SimpleFacts(pet_name="Maxie"))
        assert merged.pet_name == "Maxie"

    def test_empty_never_overwrites(self):
        """Test unknown values keep what was known."""
        existing = SimpleFacts(pet_name="Max", pet_species="dog")
        merged = merge_facts(existing, SimpleFacts(pet_breed="husky"))

        assert merged.pet_name == "Max"
        assert merged.pet_species == "dog"
        assert merged.pet_breed == "husky"

    def test_false_is_merged(self):
        """Test False overwrites unknown."""
        merged = merge_facts(EMPTY_FACTS, SimpleFacts(wearing_collar=False))
        assert merged.wearing_collar is False

    def test_inputs_unchanged(self):
        """Test merging returns a new object."""
        existing = SimpleFacts(pet_name="Max")
        merge_facts(existing, SimpleFacts(pet_species="dog"))

        assert existing.pet_species is None

    def test_known_keys_and_to_dict(self):
        """Test only known fields are reported."""
        facts = SimpleFacts(pet_name="Max", pet_microchipped=False)

        assert facts.known_keys() == ["pet_name", "pet_microchipped"]
        assert facts.to_dict() == {"pet_name": "Max", "pet_microchipped": False}
