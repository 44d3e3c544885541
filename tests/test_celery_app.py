from inkwell.celery import app


def test_beat_runs_scheduled_publishing_every_minute():
    entry = app.conf.beat_schedule["publish-scheduled-posts"]
    assert entry["task"] == "posts.tasks.publish_scheduled_posts"
    assert entry["schedule"].minute == set(range(60))
