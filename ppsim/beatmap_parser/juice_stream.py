import math

# Nested objects of a slider as seen by osu!catch: fruits on the head,
# repeats and tail, droplets on ticks, tiny droplets filling the gaps.

LEGACY_LAST_TICK_OFFSET = 36
MAX_LENGTH = 100000


def generate_slider_events(start_time, span_duration, velocity, tick_distance,
    total_distance, span_count):
    """Returns a time-ordered list of ``(event_type, time)`` tuples.

    Event types are 'head', 'tick', 'repeat', 'legacy_last_tick' and 'tail'.
    """
    length = min(MAX_LENGTH, total_distance)
    tick_distance = max(0, min(tick_distance, length))
    min_distance_from_end = velocity * 10

    events = [('head', start_time)]

    if tick_distance != 0:
        for span in range(span_count):
            span_start_time = start_time + span * span_duration
            reversed_span = span % 2 == 1

            ticks = _generate_ticks(span_start_time, span_duration, reversed_span,
                length, tick_distance, min_distance_from_end)
            if reversed_span:
                ticks.reverse()
            events.extend(ticks)

            if span < span_count - 1:
                events.append(('repeat', span_start_time + span_duration))

    total_duration = span_count * span_duration
    final_span_index = span_count - 1
    final_span_start_time = start_time + final_span_index * span_duration
    final_span_end_time = max(start_time + total_duration / 2,
        (final_span_start_time + span_duration) - LEGACY_LAST_TICK_OFFSET)

    events.append(('legacy_last_tick', final_span_end_time))
    events.append(('tail', start_time + total_duration))
    return events


def _generate_ticks(span_start_time, span_duration, reversed_span, length,
    tick_distance, min_distance_from_end):
    ticks = []
    d = tick_distance
    while d <= length:
        if d >= length - min_distance_from_end:
            break

        path_progress = d / length
        time_progress = 1 - path_progress if reversed_span else path_progress
        ticks.append(('tick', span_start_time + time_progress * span_duration))
        d += tick_distance
    return ticks


def count_nested_objects(events):
    """Counts (fruits, droplets, tiny droplets) for a list of slider events."""
    fruits = 0
    droplets = 0
    tiny_droplets = 0
    last_event = None

    for event_type, time in events:
        if last_event is not None:
            since_last_tick = int(time) - int(last_event[1])
            if since_last_tick > 80:
                time_between_tiny = since_last_tick
                while time_between_tiny > 100:
                    time_between_tiny /= 2

                t = time_between_tiny
                while t < since_last_tick:
                    tiny_droplets += 1
                    t += time_between_tiny

        last_event = (event_type, time)

        if event_type == 'tick':
            droplets += 1
        elif event_type in ('head', 'repeat', 'tail'):
            fruits += 1

    return fruits, droplets, tiny_droplets


def slider_nested_counts(hit_object, beat_length, slider_velocity, difficulty, format_version):
    scoring_distance = 100 * difficulty.slider_multiplier * slider_velocity
    velocity = scoring_distance / beat_length
    tick_distance = scoring_distance / difficulty.slider_tick_rate
    if format_version < 8:
        tick_distance /= slider_velocity

    span_count = max(1, hit_object["repeat_count"])
    distance = hit_object["pixel_length"]
    if velocity <= 0 or math.isinf(velocity):
        return 2, 0, 0
    span_duration = distance / velocity

    events = generate_slider_events(hit_object["start_time"], span_duration, velocity,
        tick_distance, distance, span_count)
    return count_nested_objects(events)
