from rest_framework import serializers

from common.fields import EpochMillisecondsField
from posts.serializers import PostOut


class AnalyticsOut(serializers.Serializer):
    totalViews = serializers.IntegerField(source="total_views")
    totalLikes = serializers.IntegerField(source="total_likes")
    totalComments = serializers.IntegerField(source="total_comments")
    totalFollowers = serializers.IntegerField(source="total_followers")
    viewsGrowth = serializers.FloatField(source="views_growth")
    likesGrowth = serializers.FloatField(source="likes_growth")
    commentsGrowth = serializers.IntegerField(source="comments_growth")
    followersGrowth = serializers.IntegerField(source="followers_growth")


class ActivityOut(serializers.Serializer):
    type = serializers.ChoiceField(choices=["like", "comment", "follow"])
    user = serializers.CharField()
    post = serializers.CharField(allow_null=True)
    time = EpochMillisecondsField()


class PostWithCommentCountOut(PostOut):
    commentCount = serializers.IntegerField(source="comment_count")


class DailyViewsOut(serializers.Serializer):
    date = serializers.CharField(help_text="YYYY-MM-DD (UTC)")
    views = serializers.IntegerField()
    day = serializers.CharField(help_text="요일 약칭, 예: Mon")
    fullDate = serializers.CharField(source="full_date", help_text="예: Jan 5")
