from rest_framework import serializers

from common.fields import EpochMillisecondsField
from posts.serializers import PostWithAuthorOut


class FeedPageOut(serializers.Serializer):
    posts = PostWithAuthorOut(many=True)
    hasMore = serializers.BooleanField(source="has_more")


class TrendingPostOut(PostWithAuthorOut):
    trendingScore = serializers.IntegerField(source="trending_score")


class RecentPostOut(serializers.Serializer):
    id = serializers.UUIDField()
    title = serializers.CharField()
    viewCount = serializers.IntegerField(source="view_count")
    likeCount = serializers.IntegerField(source="like_count")


class SuggestedUserOut(serializers.Serializer):
    id = serializers.UUIDField(source="user.id")
    name = serializers.CharField(source="user.name")
    username = serializers.CharField(source="user.username", allow_null=True)
    imageUrl = serializers.CharField(source="user.image_url", allow_null=True)
    followerCount = serializers.IntegerField(source="follower_count")
    postCount = serializers.IntegerField(source="post_count")
    engagementScore = serializers.IntegerField(source="engagement_score")
    lastPostAt = EpochMillisecondsField(source="last_post_at", allow_null=True)
    recentPosts = RecentPostOut(source="recent_posts", many=True)
