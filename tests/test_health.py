from recipegen.schemas import NutritionFacts
from recipegen.services.health import health_scorer


def test_all_zero_nutrition():
    result = health_scorer.analyze(NutritionFacts())
    # low calorie (+10) and low sodium (+5); fat share is undefined
    assert result.health_score == 65
    assert "Low protein content" in result.analysis
    assert "High fat content" not in result.analysis
    assert "Low fat content" not in result.analysis


def test_balanced_meal():
    result = health_scorer.analyze(NutritionFacts(
        calories=450, protein=30, carbs=40, fat=10, fiber=8, sugar=5, sodium=400,
    ))
    # protein +15, fiber +10, fat 20% leaves fat neutral
    assert result.health_score == 75
    assert "High protein content - excellent for muscle building" in result.analysis
    assert result.recommendations == []


def test_unhealthy_meal():
    result = health_scorer.analyze(NutritionFacts(
        calories=900, protein=3, carbs=100, fat=50, fiber=1, sugar=40, sodium=1500,
    ))
    assert result.health_score == 25
    assert "High sodium content" in result.analysis
    assert "High fat content" in result.analysis
    assert "Reduce salt and use herbs/spices for flavor" in result.recommendations
    assert "Add more vegetables or whole grains for fiber" in result.recommendations


def test_fat_without_calories_counts_as_high_fat():
    result = health_scorer.analyze(NutritionFacts(fat=5))
    assert "High fat content" in result.analysis
    assert result.health_score == 60


def test_score_clamped():
    result = health_scorer.analyze(NutritionFacts(
        calories=100, protein=20, fat=1, fiber=10, sodium=50,
    ))
    assert 0 <= result.health_score <= 100
    assert result.health_score == 95
