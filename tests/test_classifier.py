from recipegen.services.classifier import IngredientClassifier, classifier


def test_classify_partitions_every_input():
    names = ["chicken breast", "tomato", "rice", "milk", "salt", "honey"]
    cats = classifier.classify(names)

    assert cats.proteins == ["chicken breast"]
    assert cats.vegetables == ["tomato"]
    assert cats.grains == ["rice"]
    assert cats.dairy == ["milk"]
    assert cats.spices == ["salt"]
    assert cats.others == ["honey"]

    total = sum(len(getattr(cats, c)) for c in ("proteins", "vegetables", "grains", "dairy", "spices", "others"))
    assert total == len(names)


def test_category_priority_wins():
    # "garlic powder" hits both vegetables (garlic) and spices; vegetables come first
    assert classifier.category_of("garlic powder") == "vegetables"
    # "bell pepper" is a vegetable keyword even though "pepper" is a spice
    assert classifier.category_of("Bell Pepper") == "vegetables"


def test_reverse_substring_match():
    # input contained in a keyword also matches
    assert classifier.category_of("len") == "proteins"  # "lentils"


def test_duplicates_and_order_preserved():
    cats = classifier.classify(["egg", "tofu", "egg"])
    assert cats.proteins == ["egg", "tofu", "egg"]


def test_blank_goes_to_others():
    assert classifier.category_of("   ") == "others"


def test_custom_keywords():
    clf = IngredientClassifier({"proteins": ("seitan",)})
    assert clf.category_of("smoked seitan") == "proteins"
    assert clf.category_of("tomato") == "others"
