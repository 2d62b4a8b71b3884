# /eduguru/services/prompt_library.py

"""
Central library of the prompts sent to the AI provider. The product's users
are Indonesian teachers, so every prompt asks for Indonesian output.
"""

JOURNAL_REFLECTION_PROMPT = """
Sebagai asisten guru profesional, tuliskan satu paragraf refleksi singkat (maksimal 100 kata) untuk jurnal mengajar.

Konteks pertemuan:
- Tujuan Pembelajaran: {objective}
- Aktivitas: {activities}
- Keterlibatan Siswa: {engagement}

Refleksi harus menyebutkan hal yang berjalan baik dan satu atau dua saran perbaikan untuk pertemuan berikutnya.
Gunakan bahasa Indonesia yang formal namun luwes.
"""

TEACHING_METHODS_PROMPT = """
Berikan 3 ide metode pembelajaran yang kreatif dan singkat untuk materi "{topic}" di kelas {grade}.
Tulis dalam bentuk poin-poin singkat berbahasa Indonesia.
"""

COUNSELING_FOLLOW_UP_PROMPT = """
Sebagai Guru BK profesional, susun "Rencana Tindak Lanjut" (RTL) yang konkret, singkat, dan solutif.

Nama Siswa: {student_name}
Jenis Masalah: {counseling_type}
Catatan Konseling: {notes}

Berikan maksimal 3 poin langkah praktis yang dapat dilakukan guru atau siswa. Gunakan bahasa Indonesia yang empatik.
PENTING: seluruh jawaban maksimal 100 kata.
"""

ASSISTANT_SYSTEM_INSTRUCTION = """
Anda adalah Asisten Virtual EduGuru yang ramah, profesional, dan berwawasan luas.
Tugas Anda membantu guru dalam:
1. Merancang strategi pembelajaran yang kreatif.
2. Menyusun soal latihan (formatif maupun sumatif).
3. Memberikan saran penanganan siswa (konseling dasar).
4. Menjawab pertanyaan seputar materi pelajaran.

Gunakan bahasa Indonesia yang baik, sopan, dan mudah dipahami. Jawaban harus ringkas namun padat isi.
"""
