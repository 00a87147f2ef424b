from ..schemas import HealthAnalysis, NutritionFacts

BASE_SCORE = 50


class HealthScorer:
    """Rule-based health score (0..100) for per-serving nutrition."""

    def analyze(self, nutrition: NutritionFacts) -> HealthAnalysis:
        analysis: list[str] = []
        recommendations: list[str] = []
        score = BASE_SCORE

        # Calories
        if nutrition.calories < 200:
            analysis.append("Low calorie dish - great for weight management")
            score += 10
        elif nutrition.calories > 600:
            analysis.append("High calorie dish - consider portion control")
            recommendations.append("Consider reducing portion size or adding more vegetables")
            score -= 5

        # Protein
        if nutrition.protein > 15:
            analysis.append("High protein content - excellent for muscle building")
            score += 15
        elif nutrition.protein < 5:
            analysis.append("Low protein content")
            recommendations.append("Add protein sources like beans, tofu, or lean meat")

        # Fiber
        if nutrition.fiber > 5:
            analysis.append("High fiber content - great for digestive health")
            score += 10
        elif nutrition.fiber < 2:
            recommendations.append("Add more vegetables or whole grains for fiber")

        # Sugar
        if nutrition.sugar > 15:
            analysis.append("High sugar content")
            recommendations.append("Consider reducing sweet ingredients")
            score -= 5

        # Sodium
        if nutrition.sodium > 800:
            analysis.append("High sodium content")
            recommendations.append("Reduce salt and use herbs/spices for flavor")
            score -= 10
        elif nutrition.sodium < 200:
            analysis.append("Low sodium - heart-healthy option")
            score += 5

        # Share of calories from fat. Undefined when both are zero.
        fat_pct = None
        if nutrition.calories > 0:
            fat_pct = nutrition.fat * 9 / nutrition.calories * 100
        elif nutrition.fat > 0:
            fat_pct = float("inf")

        if fat_pct is not None:
            if fat_pct > 35:
                analysis.append("High fat content")
                score -= 5
            elif fat_pct < 20:
                analysis.append("Low fat content")
                score += 5

        return HealthAnalysis(
            analysis=analysis,
            health_score=max(0, min(100, score)),
            recommendations=recommendations,
        )


health_scorer = HealthScorer()
