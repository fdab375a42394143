import numpy as np

from audio_system import CUE_TONES, Cue, ToneSpec, render_tones, render_voice


def test_every_cue_has_a_tone():
    assert set(CUE_TONES) == set(Cue)


def test_buffer_shape_matches_duration_and_channels():
    tone = ToneSpec(440, 440, 0.1, 0.5)

    mono = render_tones([tone], sample_rate=8000)
    stereo = render_tones([tone], sample_rate=8000, channels=2)

    assert mono.shape == (800, 1)
    assert stereo.shape == (800, 2)
    assert np.array_equal(stereo[:, 0], stereo[:, 1])
    assert stereo.flags["C_CONTIGUOUS"]
    assert len(stereo.tobytes()) == 800 * 2 * 2


def test_delayed_voice_extends_buffer_and_starts_silent():
    samples = render_tones([ToneSpec(440, 440, 0.1, 0.5, delay_s=0.05)], sample_rate=8000)

    assert samples.shape[0] == 1200
    assert not samples[:400].any()
    assert samples[400:].any()


def test_samples_stay_in_int16_range():
    loud = [ToneSpec(300, 300, 0.05, 1.0, waveform="sawtooth", exponential=False)] * 3

    samples = render_tones(loud, sample_rate=8000)

    assert samples.dtype == np.int16
    assert samples.max() <= 32767
    assert samples.min() >= -32767


def test_voice_follows_gain_envelope():
    voice = render_voice(ToneSpec(400, 400, 0.5, 0.8, gain_end=0.1, exponential=False), sample_rate=8000)

    assert len(voice) == 4000
    assert np.abs(voice[:400]).max() > 0.7
    assert np.abs(voice[-400:]).max() < 0.2


def test_sine_voice_matches_fixed_frequency():
    sample_rate = 8000
    voice = render_voice(ToneSpec(500, 500, 0.01, 1.0, gain_end=1.0), sample_rate=sample_rate)

    t = np.arange(len(voice)) / sample_rate
    assert np.allclose(voice, np.sin(2 * np.pi * 500 * t), atol=1e-9)


def test_cue_tones_render():
    for cue, tones in CUE_TONES.items():
        assert render_tones(tones, sample_rate=8000).size > 0, cue


def test_empty_voice_list_is_silent():
    assert render_tones([]).size == 0
